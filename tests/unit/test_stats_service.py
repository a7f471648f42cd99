from datetime import date

import pytest

from salon_agenda.schemas import Specialist
from salon_agenda.services import StatsService, period_bounds, previous_period_bounds
from salon_agenda.utils.constants import UNKNOWN_SPECIALIST_COLOR, UNKNOWN_SPECIALIST_NAME
from tests.factories import MONDAY, TUESDAY, WEDNESDAY, at, make_visit

FRIDAY = date(2026, 1, 9)
NOW = at(WEDNESDAY, 12)


@pytest.fixture
def stats(resolver, specialists):
    return StatsService(resolver, specialists)


@pytest.fixture
def week_visits():
    return [
        make_visit("v1", "anna", at(MONDAY, 10), at(MONDAY, 11)),
        make_visit("v2", "anna", at(TUESDAY, 10), at(TUESDAY, 12), status='completed'),
        make_visit("v3", "marta", at(WEDNESDAY, 14), at(WEDNESDAY, 15)),
        make_visit("v4", "marta", at(WEDNESDAY, 15), at(WEDNESDAY, 16), status='cancelled'),
        make_visit("v5", "anna", at(WEDNESDAY, 13), at(WEDNESDAY, 13, 30), status='pending'),
        make_visit("v6", "kate", at(date(2025, 12, 30), 10), at(date(2025, 12, 30), 11)),
        make_visit("v7", "anna", at(FRIDAY, 10), at(FRIDAY, 11)),
    ]


# -----------------------------
# Períodos
# -----------------------------
@pytest.mark.parametrize("period, reference, expected", [
    ('week', date(2026, 1, 7), (date(2026, 1, 5), date(2026, 1, 11))),
    ('week', date(2026, 1, 5), (date(2026, 1, 5), date(2026, 1, 11))),
    ('month', date(2026, 2, 15), (date(2026, 2, 1), date(2026, 2, 28))),
    ('year', date(2026, 6, 1), (date(2026, 1, 1), date(2026, 12, 31))),
])
def test_period_bounds(period, reference, expected):
    assert period_bounds(period, reference) == expected


@pytest.mark.parametrize("period, reference, expected", [
    ('week', date(2026, 1, 7), (date(2025, 12, 29), date(2026, 1, 4))),
    ('month', date(2026, 3, 31), (date(2026, 2, 1), date(2026, 2, 28))),
    ('year', date(2026, 6, 1), (date(2025, 1, 1), date(2025, 12, 31))),
])
def test_previous_period_bounds(period, reference, expected):
    assert previous_period_bounds(period, reference) == expected


def test_unknown_period_raises():
    with pytest.raises(ValueError):
        period_bounds('decade', date(2026, 1, 1))

# -----------------------------
# Resumo do período
# -----------------------------
def test_summarize_week(stats, week_visits):
    summary = stats.summarize_period(week_visits, 'week', NOW)

    assert summary.today_visit_count == 2
    assert summary.period_visit_count == 5
    assert summary.previous_period_visit_count == 1
    assert summary.cancelled_count == 1
    assert summary.cancelled_percent == 17
    assert summary.completed_count == 1


def test_summarize_empty_period(stats):
    summary = stats.summarize_period([], 'month', NOW)
    assert summary.period_visit_count == 0
    assert summary.cancelled_percent == 0

# -----------------------------
# Carga da equipe
# -----------------------------
def test_team_load_counts_until_today(stats, week_visits):
    loads = {entry.specialist.id: entry for entry in stats.team_load(week_visits, 'week', NOW)}

    # Segunda a quarta, 10h por dia
    assert loads["anna"].available_minutes == 1800
    assert loads["anna"].visit_count == 4
    assert loads["anna"].total_minutes == 270
    assert loads["anna"].load_percent == 15
    assert loads["marta"].total_minutes == 60
    assert loads["marta"].load_percent == 3
    assert loads["kate"].load_percent == 0


def test_team_load_discounts_off_days(resolver, week_visits):
    marta = Specialist(id="marta", name="Marta", off_days=[TUESDAY])
    [entry] = StatsService(resolver, [marta]).team_load(week_visits, 'week', NOW)

    assert entry.available_minutes == 1200
    assert entry.load_percent == 5


def test_team_load_is_capped_at_100(stats):
    visits = [
        make_visit("x1", "anna", at(MONDAY, 9), at(MONDAY, 19)),
        make_visit("x2", "anna", at(MONDAY, 10), at(MONDAY, 12)),
    ]
    loads = {entry.specialist.id: entry for entry in stats.team_load(visits, 'week', at(MONDAY, 20))}
    assert loads["anna"].load_percent == 100

# -----------------------------
# Folgas e próximas visitas
# -----------------------------
def test_upcoming_off_days_window(resolver):
    specialists = [
        Specialist(id="marta", name="Marta", off_days=[date(2026, 1, 19), MONDAY, date(2026, 1, 8), date(2026, 1, 18)]),
        Specialist(id="kate", name="Kate", off_days=[TUESDAY]),
    ]
    upcoming = StatsService(resolver, specialists).upcoming_off_days(MONDAY)

    assert [(u.specialist.id, u.date) for u in upcoming] == [
        ("kate", TUESDAY),
        ("marta", date(2026, 1, 8)),
        ("marta", date(2026, 1, 18)),
    ]
    assert upcoming[0].day_of_week == "tuesday"


def test_next_up_lists_todays_future_visits(stats, week_visits):
    unassigned = make_visit("v8", None, at(WEDNESDAY, 16, 30), at(WEDNESDAY, 17))
    upcoming = stats.next_up(week_visits + [unassigned], NOW)

    assert [n.visit.id for n in upcoming] == ["v5", "v3", "v8"]
    assert upcoming[0].specialist_name == "Anna"
    assert upcoming[0].specialist_color == "#6B2737"
    assert upcoming[0].time_label == "13:00"
    assert upcoming[2].specialist_name == UNKNOWN_SPECIALIST_NAME
    assert upcoming[2].specialist_color == UNKNOWN_SPECIALIST_COLOR


def test_next_up_is_limited(stats):
    visits = [
        make_visit(f"v{hour}", "anna", at(WEDNESDAY, hour), at(WEDNESDAY, hour, 30))
        for hour in range(13, 19)
    ]
    upcoming = stats.next_up(visits, NOW)
    assert [n.visit.id for n in upcoming] == ["v13", "v14", "v15", "v16"]

# -----------------------------
# Tendência
# -----------------------------
def test_trend_week_is_daily_with_weekday_labels(stats, week_visits):
    series = stats.trend(week_visits, 'week', NOW)

    assert [e.label for e in series.entries] == ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
    # Quarta: v3 e v5 contam, v4 (cancelada) não
    assert [e.count for e in series.entries] == [1, 1, 2, 0, 1, 0, 0]
    assert [e.date for e in series.entries if e.is_current] == [WEDNESDAY]
    assert series.max_count == 2


def test_trend_month_is_daily_with_day_numbers(stats, week_visits):
    series = stats.trend(week_visits, 'month', NOW)

    assert len(series.entries) == 31
    assert series.entries[0].label == "1"
    assert series.entries[-1].label == "31"
    assert {e.label: e.count for e in series.entries if e.count} == {"5": 1, "6": 1, "7": 2, "9": 1}
    # A visita de dezembro fica de fora
    assert sum(e.count for e in series.entries) == 5
    assert [e.label for e in series.entries if e.is_current] == ["7"]


def test_trend_year_is_monthly(stats, week_visits):
    series = stats.trend(week_visits, 'year', NOW)

    assert [e.label for e in series.entries][:3] == ["Jan", "Feb", "Mar"]
    assert len(series.entries) == 12
    assert series.entries[0].date == date(2026, 1, 1)
    assert series.entries[0].count == 5
    assert all(e.count == 0 for e in series.entries[1:])
    assert [e.label for e in series.entries if e.is_current] == ["Jan"]
    assert series.max_count == 5


def test_trend_without_visits_keeps_scale_of_one(stats):
    series = stats.trend([], 'week', NOW)
    assert all(e.count == 0 for e in series.entries)
    assert series.max_count == 1
