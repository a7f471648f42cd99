# salon_agenda/services/stats_service.py
import calendar
import math
from datetime import date, datetime, timedelta, tzinfo
from typing import Any, Iterable, List, Mapping, Optional, Tuple, Union

from salon_agenda.schemas.specialist_schema import Specialist
from salon_agenda.schemas.stats_schema import (
    NextUpVisit, PeriodSummary, StatsPeriod, TeamLoadEntry, TrendEntry, TrendSeries, UpcomingOffDay
)
from salon_agenda.schemas.visit_schema import Visit
from salon_agenda.services.schedule_resolver import ScheduleResolver
from salon_agenda.services.visit_index import VisitIndex
from salon_agenda.utils.constants import (
    NEXT_UP_LIMIT, OFF_DAYS_LOOK_AHEAD_DAYS, TREND_MONTH_LABELS, TREND_WEEKDAY_LABELS,
    UNKNOWN_SPECIALIST_COLOR, UNKNOWN_SPECIALIST_NAME
)
from salon_agenda.utils.logger import setup_logger
from salon_agenda.utils.time_utils import format_time, iter_days, to_day, to_wall_clock, weekday_name

logger = setup_logger(__name__)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _count_active(visits: Iterable[Visit]) -> int:
    return sum(1 for v in visits if not v.is_cancelled)


def period_bounds(period: StatsPeriod, reference: date) -> Tuple[date, date]:
    """Primeiro e último dia do período (semana começa na segunda-feira)."""
    if period == 'week':
        start = reference - timedelta(days=reference.weekday())
        return start, start + timedelta(days=6)
    if period == 'month':
        last_day = calendar.monthrange(reference.year, reference.month)[1]
        return reference.replace(day=1), reference.replace(day=last_day)
    if period == 'year':
        return date(reference.year, 1, 1), date(reference.year, 12, 31)
    raise ValueError(f"Período desconhecido: {period}")


def previous_period_bounds(period: StatsPeriod, reference: date) -> Tuple[date, date]:
    """Período imediatamente anterior (para comparação)."""
    if period == 'week':
        return period_bounds(period, reference - timedelta(days=7))
    if period == 'month':
        return period_bounds(period, reference.replace(day=1) - timedelta(days=1))
    if period == 'year':
        return period_bounds(period, date(reference.year - 1, 1, 1))
    raise ValueError(f"Período desconhecido: {period}")


class StatsService:
    """Indicadores do painel: volume do período, carga da equipe, folgas e próximas visitas."""

    def __init__(self,
                 resolver: ScheduleResolver,
                 specialists: Iterable[Union[Specialist, Mapping[str, Any]]] = (),
                 tz: Optional[tzinfo] = None):
        self.resolver = resolver
        self.specialists = tuple(
            s if isinstance(s, Specialist) else Specialist.model_validate(s)
            for s in specialists
        )
        self.tz = tz or resolver.tz

    def summarize_period(self, visits: Iterable[Visit], period: StatsPeriod, now: datetime) -> PeriodSummary:
        index = VisitIndex(visits, self.tz)
        today = to_day(now, self.tz)

        period_start, period_end = period_bounds(period, today)
        previous_start, previous_end = previous_period_bounds(period, today)

        today_visits = index.get_visits_for_date(today)
        period_visits = index.get_visits_for_range(period_start, period_end)
        previous_visits = index.get_visits_for_range(previous_start, previous_end)

        cancelled = [v for v in period_visits if v.status == 'cancelled']
        completed = [v for v in period_visits if v.status == 'completed']
        cancelled_percent = _round_half_up(len(cancelled) / len(period_visits) * 100) if period_visits else 0

        return PeriodSummary(
            period=period,
            today_visit_count=_count_active(today_visits),
            period_visit_count=_count_active(period_visits),
            previous_period_visit_count=_count_active(previous_visits),
            cancelled_count=len(cancelled),
            cancelled_percent=cancelled_percent,
            completed_count=len(completed),
        )

    def trend(self, visits: Iterable[Visit], period: StatsPeriod, now: datetime) -> TrendSeries:
        """
        Série do gráfico de visitas (canceladas não contam):
            - semana: um ponto por dia, rótulo do dia da semana (Mon ... Sun)
            - mês: um ponto por dia, rótulo com o número do dia
            - ano: um ponto por mês, rótulo do mês (Jan ... Dec)
        """
        index = VisitIndex(visits, self.tz)
        today = to_day(now, self.tz)
        period_start, period_end = period_bounds(period, today)

        entries: List[TrendEntry] = []
        if period == 'year':
            for month in range(1, 13):
                month_start, month_end = period_bounds('month', date(today.year, month, 1))
                entries.append(TrendEntry(
                    date=month_start,
                    label=TREND_MONTH_LABELS[month - 1],
                    count=_count_active(index.get_visits_for_range(month_start, month_end)),
                    is_current=month == today.month,
                ))
        else:
            for day in iter_days(period_start, period_end):
                entries.append(TrendEntry(
                    date=day,
                    label=TREND_WEEKDAY_LABELS[day.weekday()] if period == 'week' else str(day.day),
                    count=_count_active(index.get_visits_for_date(day)),
                    is_current=day == today,
                ))

        max_count = max([entry.count for entry in entries] + [1])
        return TrendSeries(period=period, entries=entries, max_count=max_count)

    def available_minutes(self, specialist: Specialist, start: date, end: date) -> int:
        """Minutos de salão aberto em [start, end], descontando as folgas do(a) profissional."""
        total = 0
        for day in iter_days(start, end):
            if specialist.is_off_on(day):
                continue
            schedule = self.resolver.resolve_day_schedule(day)
            if not schedule.is_open:
                continue
            total += sum(r.closes.minutes - r.opens.minutes for r in schedule.hours)
        return total

    def team_load(self, visits: Iterable[Visit], period: StatsPeriod, now: datetime) -> List[TeamLoadEntry]:
        """
        Carga de cada profissional no período: minutos agendados / minutos disponíveis
        (do início do período até hoje), limitada a 100%.
        """
        index = VisitIndex(visits, self.tz)
        today = to_day(now, self.tz)
        period_start, period_end = period_bounds(period, today)
        period_visits = index.get_visits_for_range(period_start, period_end)

        entries: List[TeamLoadEntry] = []
        for specialist in self.specialists:
            own_visits = [
                v for v in period_visits
                if v.specialist_id == specialist.id and not v.is_cancelled
            ]
            total_minutes = sum(v.duration_minutes for v in own_visits)
            available = self.available_minutes(specialist, period_start, min(period_end, today))

            load_percent = min(_round_half_up(total_minutes / available * 100), 100) if available > 0 else 0

            entries.append(TeamLoadEntry(
                specialist=specialist,
                visit_count=len(own_visits),
                total_minutes=total_minutes,
                available_minutes=available,
                load_percent=load_percent,
            ))
        return entries

    def upcoming_off_days(self, today: Union[date, datetime],
                          look_ahead_days: int = OFF_DAYS_LOOK_AHEAD_DAYS) -> List[UpcomingOffDay]:
        """Folgas depois de hoje e antes de hoje + look_ahead_days, em ordem de data."""
        today = to_day(today, self.tz)
        horizon = today + timedelta(days=look_ahead_days)

        upcoming: List[UpcomingOffDay] = []
        for specialist in self.specialists:
            for off_day in specialist.off_days:
                if today < off_day < horizon:
                    upcoming.append(UpcomingOffDay(
                        specialist=specialist,
                        date=off_day,
                        day_of_week=weekday_name(off_day),
                    ))

        upcoming.sort(key=lambda entry: entry.date)
        return upcoming

    def next_up(self, visits: Iterable[Visit], now: datetime, limit: int = NEXT_UP_LIMIT) -> List[NextUpVisit]:
        """Próximas visitas de hoje (não canceladas) que ainda não começaram."""
        now_wall = to_wall_clock(now, self.tz)
        index = VisitIndex(visits, self.tz)
        by_id = {s.id: s for s in self.specialists}

        upcoming = [
            v for v in index.get_visits_for_date(now_wall.date())
            if to_wall_clock(v.start_time, self.tz) > now_wall and not v.is_cancelled
        ]
        upcoming.sort(key=lambda v: to_wall_clock(v.start_time, self.tz))

        result: List[NextUpVisit] = []
        for visit in upcoming[:limit]:
            specialist = by_id.get(visit.specialist_id) if visit.specialist_id else None
            result.append(NextUpVisit(
                visit=visit,
                specialist_name=specialist.name if specialist else UNKNOWN_SPECIALIST_NAME,
                specialist_color=(specialist.color if specialist and specialist.color else UNKNOWN_SPECIALIST_COLOR),
                time_label=format_time(to_wall_clock(visit.start_time, self.tz)),
            ))
        return result
