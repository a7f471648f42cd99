# salon_agenda/engine/factory.py
from datetime import date, datetime
from typing import Any, Iterable, List, Mapping, Optional, Tuple, Union

from salon_agenda.config.settings_loader import Settings, load_settings
from salon_agenda.schemas.schedule_schema import DaySchedule, SpecialClosure
from salon_agenda.schemas.specialist_schema import Specialist
from salon_agenda.schemas.stats_schema import (
    NextUpVisit, PeriodSummary, StatsPeriod, TeamLoadEntry, TrendSeries, UpcomingOffDay
)
from salon_agenda.schemas.visit_schema import AvailableSlot, PositionedVisit, Visit
from salon_agenda.services.availability_service import AvailabilityService
from salon_agenda.services.lane_packer import compute_positioned_visits
from salon_agenda.services.schedule_resolver import ScheduleResolver
from salon_agenda.services.slot_search_service import SlotSearchService
from salon_agenda.services.stats_service import StatsService
from salon_agenda.services.visit_index import VisitIndex
from salon_agenda.utils.constants import DEFAULT_SALON_SCHEDULE
from salon_agenda.utils.logger import setup_logger
from salon_agenda.utils.time_utils import from_wall_clock, round_to_nearest, to_wall_clock

logger = setup_logger(__name__)


class SchedulingEngine:
    """
    Fachada do motor de agenda montada a partir de um único snapshot
    (horário semanal, fechamentos e profissionais).

    O motor não guarda visitas: elas são passadas em cada chamada.
    """

    def __init__(self,
                 settings: Settings,
                 resolver: ScheduleResolver,
                 availability: AvailabilityService,
                 slot_search: SlotSearchService,
                 stats: StatsService):
        self.settings = settings
        self.resolver = resolver
        self.availability = availability
        self.slot_search = slot_search
        self.stats = stats

    @property
    def specialists(self) -> Tuple[Specialist, ...]:
        return self.availability.specialists

    # ---------------- Horário do salão ----------------
    def resolve_day_schedule(self, day: Union[date, datetime]) -> DaySchedule:
        return self.resolver.resolve_day_schedule(day)

    def is_open_at(self, moment: datetime) -> bool:
        return self.resolver.is_open_at(moment)

    # ---------------- Disponibilidade ----------------
    def is_specialist_available(self, specialist_id: Optional[str], start: datetime, end: datetime,
                                bookings: Iterable[Visit] = (), exclude_visit_id: Optional[str] = None) -> bool:
        return self.availability.is_specialist_available(specialist_id, start, end, bookings, exclude_visit_id)

    def check_availability(self, specialist_id: Optional[str], start: datetime, end: datetime,
                           bookings: Iterable[Visit] = (), exclude_visit_id: Optional[str] = None) -> Tuple[bool, str]:
        return self.availability.check_availability(specialist_id, start, end, bookings, exclude_visit_id)

    # ---------------- Busca de horários ----------------
    def default_visit_start(self, moment: datetime) -> datetime:
        """Início sugerido para uma nova visita: o instante arredondado à fronteira mais próxima da grade."""
        aware = moment.tzinfo is not None
        rounded = round_to_nearest(to_wall_clock(moment, self.resolver.tz), self.settings.slot_step_minutes)
        return from_wall_clock(rounded, self.resolver.tz, aware)

    def find_next_available_slot(self, specialist_id: Optional[str], after: datetime, duration_minutes: int,
                                 bookings: Iterable[Visit] = ()) -> Optional[datetime]:
        return self.slot_search.find_next_available_slot(specialist_id, after, duration_minutes, bookings)

    def find_available_slots(self, after: datetime, duration_minutes: int, bookings: Iterable[Visit] = (),
                             specialist_id: Optional[str] = None, days_to_search: Optional[int] = None,
                             exclude_visit_id: Optional[str] = None) -> List[AvailableSlot]:
        return self.slot_search.find_available_slots(
            after,
            duration_minutes,
            bookings,
            specialist_id=specialist_id,
            days_to_search=self.settings.slot_search_days if days_to_search is None else days_to_search,
            exclude_visit_id=exclude_visit_id,
        )

    # ---------------- Linha do tempo ----------------
    def build_visit_index(self, visits: Iterable[Visit]) -> VisitIndex:
        return VisitIndex(visits, self.resolver.tz)

    def positioned_visits_for_date(self, index: VisitIndex, day: Union[date, datetime],
                                   specialist_id: Optional[str] = None) -> List[PositionedVisit]:
        return compute_positioned_visits(
            index.get_visits_for_date(day, specialist_id),
            hour_height=self.settings.timeline_hour_height,
            day_start_hour=self.settings.timeline_start_hour,
            tz=self.resolver.tz,
        )

    # ---------------- Estatísticas ----------------
    def summarize_period(self, visits: Iterable[Visit], period: StatsPeriod, now: datetime) -> PeriodSummary:
        return self.stats.summarize_period(visits, period, now)

    def team_load(self, visits: Iterable[Visit], period: StatsPeriod, now: datetime) -> List[TeamLoadEntry]:
        return self.stats.team_load(visits, period, now)

    def upcoming_off_days(self, today: Union[date, datetime]) -> List[UpcomingOffDay]:
        return self.stats.upcoming_off_days(today)

    def next_up(self, visits: Iterable[Visit], now: datetime) -> List[NextUpVisit]:
        return self.stats.next_up(visits, now)

    def trend(self, visits: Iterable[Visit], period: StatsPeriod, now: datetime) -> TrendSeries:
        return self.stats.trend(visits, period, now)


def create_scheduling_engine(weekly_schedule: Optional[Mapping[str, Any]] = None,
                             closures: Iterable[Union[SpecialClosure, Mapping[str, Any]]] = (),
                             specialists: Iterable[Union[Specialist, Mapping[str, Any]]] = (),
                             settings: Optional[Settings] = None) -> SchedulingEngine:
    """Função Factory: monta todas as dependências do motor a partir do snapshot e da configuração."""

    # --- 1. Configuração ---
    settings = settings or load_settings()
    tz = settings.tz

    # --- 2. Horário do salão ---
    if weekly_schedule is None:
        logger.info("Horário semanal não informado; usando o horário padrão do salão.")
        weekly_schedule = DEFAULT_SALON_SCHEDULE
    resolver = ScheduleResolver(weekly_schedule, closures, tz)

    # --- 3. Serviços ---
    availability = AvailabilityService(resolver, specialists)
    slot_search = SlotSearchService(
        resolver,
        availability,
        step_minutes=settings.slot_step_minutes,
        max_results=settings.slot_search_limit,
        horizon_days=settings.slot_search_days,
    )
    stats = StatsService(resolver, availability.specialists, tz)

    logger.info(
        f"Motor de agenda inicializado: {len(availability.specialists)} profissionais, "
        f"{len(resolver.closures)} fechamentos, fuso {settings.salon_timezone}."
    )
    return SchedulingEngine(settings, resolver, availability, slot_search, stats)
