import pytest

from salon_agenda.config.settings_loader import Settings
from salon_agenda.engine.factory import create_scheduling_engine
from salon_agenda.schemas import SpecialClosure, Specialist
from salon_agenda.services import AvailabilityService, ScheduleResolver, SlotSearchService
from salon_agenda.utils.constants import DEFAULT_SALON_SCHEDULE
from tests.factories import TUESDAY, WEDNESDAY, at, make_visit


@pytest.fixture
def specialists():
    return [
        Specialist(id="anna", name="Anna", role="Stylist", color="#6B2737"),
        Specialist(id="marta", name="Marta", role="Junior Stylist", color="#E08E45"),
        Specialist(id="kate", name="Kate", role="Manager", color="#3943B7"),
    ]


@pytest.fixture
def resolver():
    return ScheduleResolver(DEFAULT_SALON_SCHEDULE)


@pytest.fixture
def availability(resolver, specialists):
    return AvailabilityService(resolver, specialists)


@pytest.fixture
def slot_search(resolver, availability):
    return SlotSearchService(resolver, availability)


@pytest.fixture
def anna_booking():
    # Visita existente de Anna: terça 10:00-11:00
    return make_visit("v1", "anna", at(TUESDAY, 10), at(TUESDAY, 11))


@pytest.fixture
def wednesday_closure():
    return SpecialClosure(date=WEDNESDAY, reason="Inventário")


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def engine(settings, specialists):
    return create_scheduling_engine(specialists=specialists, settings=settings)
