# salon_agenda/services/slot_search_service.py
from datetime import datetime, timedelta
from typing import Iterable, List, Optional

from salon_agenda.schemas.visit_schema import AvailableSlot, Visit
from salon_agenda.services.availability_service import AvailabilityService
from salon_agenda.services.schedule_resolver import ScheduleResolver
from salon_agenda.utils.constants import ANY_SPECIALIST, MAX_SLOT_RESULTS, SEARCH_HORIZON_DAYS, SLOT_STEP_MINUTES
from salon_agenda.utils.logger import setup_logger
from salon_agenda.utils.time_utils import format_time, from_wall_clock, round_up_to_step, start_of_day, to_wall_clock

logger = setup_logger(__name__)


class SlotSearchService:
    """
    Busca de horários livres sobre a grade de 15 minutos.

    A busca é linear e limitada (horizonte x 96 passos/dia no pior caso):
    cada candidato é validado pelo AvailabilityService, o que mantém o
    resultado correto mesmo com horários irregulares.
    """

    def __init__(self,
                 resolver: ScheduleResolver,
                 availability: AvailabilityService,
                 step_minutes: int = SLOT_STEP_MINUTES,
                 max_results: int = MAX_SLOT_RESULTS,
                 horizon_days: int = SEARCH_HORIZON_DAYS):
        self.resolver = resolver
        self.availability = availability
        self.step = timedelta(minutes=step_minutes)
        self.step_minutes = step_minutes
        self.max_results = max_results
        self.horizon_days = horizon_days

    def find_next_available_slot(self,
                                 specialist_id: Optional[str],
                                 after: datetime,
                                 duration_minutes: int,
                                 bookings: Iterable[Visit] = ()) -> Optional[datetime]:
        """
        Primeiro início livre a partir de ``after`` (arredondado para cima na grade),
        dentro do horizonte de dias. Retorna None se nada couber.
        """
        if duration_minutes <= 0:
            logger.warning(f"Duração inválida na busca do próximo horário: {duration_minutes} min")
            return None

        # Cópia imutável: a lista do chamador pode mudar durante a busca
        snapshot = tuple(bookings)
        aware = after.tzinfo is not None
        after_wall = to_wall_clock(after, self.resolver.tz)

        duration = timedelta(minutes=duration_minutes)
        current = round_up_to_step(after_wall, self.step_minutes)
        limit = after_wall + timedelta(days=self.horizon_days)

        while current < limit:
            # Dia fechado: pula direto para o início do dia seguinte
            if self.resolver.is_closed_on(current.date()):
                current = start_of_day(current.date() + timedelta(days=1))
                continue

            if self.availability.is_specialist_available(specialist_id, current, current + duration, snapshot):
                logger.debug(f"Próximo horário livre de '{specialist_id}': {current.isoformat()}")
                return from_wall_clock(current, self.resolver.tz, aware)

            current += self.step

        logger.debug(f"Nenhum horário livre para '{specialist_id}' em {self.horizon_days} dias a partir de {after_wall}")
        return None

    def find_available_slots(self,
                             after: datetime,
                             duration_minutes: int,
                             bookings: Iterable[Visit] = (),
                             specialist_id: Optional[str] = None,
                             days_to_search: Optional[int] = None,
                             exclude_visit_id: Optional[str] = None) -> List[AvailableSlot]:
        """
        Lista até ``max_results`` horários livres (no total, não por profissional ou dia).

        Ordem de descoberta: dia crescente, ordem da lista de profissionais e
        horário crescente dentro do dia. Nenhuma ordenação extra é aplicada.
        """
        slots: List[AvailableSlot] = []
        if duration_minutes <= 0:
            logger.warning(f"Duração inválida na busca de horários: {duration_minutes} min")
            return slots

        snapshot = tuple(bookings)
        after_wall = to_wall_clock(after, self.resolver.tz)
        first_start = round_up_to_step(after_wall, self.step_minutes)
        duration = timedelta(minutes=duration_minutes)

        if specialist_id and specialist_id != ANY_SPECIALIST:
            specialists = [s for s in self.availability.specialists if s.id == specialist_id]
        else:
            specialists = list(self.availability.specialists)

        if days_to_search is None:
            days_to_search = self.horizon_days

        for offset in range(days_to_search):
            search_date = after_wall.date() + timedelta(days=offset)

            # 1. Salão fechado no dia inteiro
            if self.resolver.is_closed_on(search_date):
                continue

            for specialist in specialists:
                # 2. Horário efetivo do(a) profissional
                schedule = self.availability.effective_day_schedule(specialist, search_date)
                if not schedule.is_open:
                    continue

                # 3. Varre cada faixa em passos da grade
                for time_range in schedule.hours:
                    current = time_range.opens.on(search_date)
                    range_end = time_range.closes.on(search_date)

                    if search_date == after_wall.date() and first_start > current:
                        current = first_start

                    while current + duration <= range_end:
                        slot_end = current + duration
                        if self.availability.is_specialist_available(
                                specialist.id, current, slot_end, snapshot, exclude_visit_id):
                            slots.append(AvailableSlot(
                                specialist_id=specialist.id,
                                date=search_date,
                                start_time=format_time(current),
                                end_time=format_time(slot_end)
                            ))
                            if len(slots) >= self.max_results:
                                logger.debug(f"Limite de {self.max_results} horários atingido.")
                                return slots
                        current += self.step

        return slots
