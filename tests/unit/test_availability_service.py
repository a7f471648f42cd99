from datetime import datetime

import pytest
import pytz

from salon_agenda.schemas import Specialist
from salon_agenda.services import AvailabilityService, ScheduleResolver
from salon_agenda.services.availability_service import overlaps
from salon_agenda.utils.constants import DEFAULT_SALON_SCHEDULE
from salon_agenda.utils.system_message import MESSAGES
from tests.factories import MONDAY, NEXT_MONDAY, SATURDAY, SUNDAY, TUESDAY, WEDNESDAY, at, make_visit


# -----------------------------
# overlaps
# -----------------------------
@pytest.mark.parametrize("a, b, expected", [
    ((10, 11), (10, 11), True),
    ((10, 11), (10.5, 12), True),
    ((10, 11), (11, 12), False),     # fronteira encostada não conflita
    ((10, 11), (9, 10), False),
    ((9, 12), (10, 11), True),
])
def test_overlaps_is_symmetric(a, b, expected):
    def dt(hour):
        return at(TUESDAY, int(hour), int((hour % 1) * 60))

    a_start, a_end = dt(a[0]), dt(a[1])
    b_start, b_end = dt(b[0]), dt(b[1])
    assert overlaps(a_start, a_end, b_start, b_end) is expected
    assert overlaps(b_start, b_end, a_start, a_end) is expected

# -----------------------------
# Conflitos com visitas
# -----------------------------
def test_anna_conflicts_with_existing_visit(availability, anna_booking):
    assert availability.is_specialist_available("anna", at(TUESDAY, 10, 30), at(TUESDAY, 11, 30), [anna_booking]) is False
    assert availability.is_specialist_available("anna", at(TUESDAY, 11), at(TUESDAY, 12), [anna_booking]) is True
    assert availability.is_specialist_available("anna", at(TUESDAY, 9), at(TUESDAY, 10), [anna_booking]) is True


def test_other_specialist_is_not_blocked_by_anna_visit(availability, anna_booking):
    assert availability.is_specialist_available("marta", at(TUESDAY, 10), at(TUESDAY, 11), [anna_booking]) is True


def test_unassigned_visit_does_not_block_anyone(availability):
    unassigned = make_visit("v9", None, at(TUESDAY, 10), at(TUESDAY, 11))
    assert availability.is_specialist_available("anna", at(TUESDAY, 10), at(TUESDAY, 11), [unassigned]) is True


def test_exclude_visit_id_ignores_visit_being_edited(availability, anna_booking):
    start, end = at(TUESDAY, 10, 30), at(TUESDAY, 11, 30)
    assert availability.is_specialist_available("anna", start, end, [anna_booking]) is False
    assert availability.is_specialist_available("anna", start, end, [anna_booking], exclude_visit_id="v1") is True


def test_cancelled_visit_still_blocks(availability):
    cancelled = make_visit("v2", "anna", at(TUESDAY, 10), at(TUESDAY, 11), status='cancelled')
    assert availability.is_specialist_available("anna", at(TUESDAY, 10), at(TUESDAY, 11), [cancelled]) is False


def test_conflict_message_names_the_visit(availability, anna_booking):
    available, message = availability.check_availability(
        "anna", at(TUESDAY, 10, 30), at(TUESDAY, 11, 30), [anna_booking])
    assert available is False
    assert message == MESSAGES['VISIT_CONFLICT'].format(visita="v1")

# -----------------------------
# Horário do salão
# -----------------------------
def test_visit_ending_at_closing_time_is_rejected(availability):
    # Fechamento é exclusivo e a ponta final também é checada
    available, message = availability.check_availability("anna", at(MONDAY, 18), at(MONDAY, 19))
    assert available is False
    assert message == MESSAGES['SALON_CLOSED']


def test_closed_day_rejects_every_interval(availability):
    for hour in range(0, 23):
        assert availability.is_specialist_available("anna", at(SUNDAY, hour), at(SUNDAY, hour, 30)) is False


def test_special_closure_blocks_everyone(specialists, wednesday_closure):
    availability = AvailabilityService(ScheduleResolver(DEFAULT_SALON_SCHEDULE, [wednesday_closure]), specialists)
    for specialist in specialists:
        assert availability.is_specialist_available(specialist.id, at(WEDNESDAY, 10), at(WEDNESDAY, 11)) is False


def test_invalid_interval(availability):
    available, message = availability.check_availability("anna", at(MONDAY, 11), at(MONDAY, 10))
    assert available is False
    assert message == MESSAGES['INVALID_INTERVAL']

# -----------------------------
# Profissional
# -----------------------------
def test_unknown_specialist_only_checks_salon_endpoints(availability):
    # Só as pontas são checadas: sábado aberto -> segunda aberta passa, domingo não
    assert availability.is_specialist_available("ghost", at(SATURDAY, 13), at(NEXT_MONDAY, 10)) is True
    assert availability.is_specialist_available("ghost", at(SATURDAY, 13), at(SUNDAY, 10)) is False

    available, message = availability.check_availability(None, at(MONDAY, 10), at(MONDAY, 11))
    assert available is True
    assert message == MESSAGES['UNKNOWN_SPECIALIST']


def test_off_day_blocks_specialist(resolver):
    marta = Specialist(id="marta", name="Marta", off_days=[TUESDAY])
    availability = AvailabilityService(resolver, [marta])

    available, message = availability.check_availability("marta", at(TUESDAY, 10), at(TUESDAY, 11))
    assert available is False
    assert message == MESSAGES['SPECIALIST_OFF_DAY'].format(nome="Marta", data="2026-01-06")
    assert availability.is_specialist_available("marta", at(MONDAY, 10), at(MONDAY, 11)) is True


def test_override_replaces_salon_hours(resolver):
    kate = Specialist.model_validate({
        "id": "kate",
        "name": "Kate",
        "availabilityOverrides": {
            "monday": {"isOpen": True, "hours": [{"openTime": "12:00", "closeTime": "16:00"}]},
            "tuesday": {"isOpen": False, "hours": []},
        },
    })
    availability = AvailabilityService(resolver, [kate])

    assert availability.is_specialist_available("kate", at(MONDAY, 10), at(MONDAY, 11)) is False
    assert availability.is_specialist_available("kate", at(MONDAY, 12), at(MONDAY, 13)) is True
    assert availability.is_specialist_available("kate", at(MONDAY, 15, 30), at(MONDAY, 16, 30)) is False

    available, message = availability.check_availability("kate", at(TUESDAY, 10), at(TUESDAY, 11))
    assert available is False
    assert message == MESSAGES['SPECIALIST_NOT_WORKING'].format(nome="Kate", dia="tuesday")

    # Sem chave para quarta: vale o horário do salão
    assert availability.is_specialist_available("kate", at(WEDNESDAY, 9), at(WEDNESDAY, 10)) is True


def test_override_cannot_open_closed_salon(resolver):
    kate = Specialist(id="kate", name="Kate", availability_overrides={
        "sunday": {"is_open": True, "hours": [{"open_time": "10:00", "close_time": "14:00"}]},
    })
    availability = AvailabilityService(resolver, [kate])

    available, message = availability.check_availability("kate", at(SUNDAY, 10), at(SUNDAY, 11))
    assert available is False
    assert message == MESSAGES['SALON_CLOSED']


def test_specialists_accept_raw_dicts(resolver):
    availability = AvailabilityService(resolver, [{"id": "anna", "name": "Anna", "offDays": ["2026-01-05"]}])
    assert availability.get_specialist("anna").is_off_on(MONDAY)
    assert availability.get_specialist(None) is None

# -----------------------------
# Fuso horário
# -----------------------------
def test_aware_instants_use_salon_timezone(specialists):
    warsaw = pytz.timezone("Europe/Warsaw")
    availability = AvailabilityService(ScheduleResolver(DEFAULT_SALON_SCHEDULE, tz=warsaw), specialists)

    # 08:00-09:00 UTC = 09:00-10:00 em Varsóvia
    start = datetime(2026, 1, 5, 8, 0, tzinfo=pytz.UTC)
    end = datetime(2026, 1, 5, 9, 0, tzinfo=pytz.UTC)
    assert availability.is_specialist_available("anna", start, end) is True

    booking = make_visit("v1", "anna", at(MONDAY, 9, 30), at(MONDAY, 10, 30))
    assert availability.is_specialist_available("anna", start, end, [booking]) is False
