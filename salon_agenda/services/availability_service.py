# salon_agenda/services/availability_service.py
from datetime import date, datetime
from typing import Any, Iterable, Mapping, Optional, Tuple, Union

from salon_agenda.schemas.schedule_schema import DaySchedule
from salon_agenda.schemas.specialist_schema import Specialist
from salon_agenda.schemas.visit_schema import Visit
from salon_agenda.services.schedule_resolver import ScheduleResolver
from salon_agenda.utils.logger import setup_logger
from salon_agenda.utils.system_message import MESSAGES
from salon_agenda.utils.time_utils import TimeOfDay, to_day, to_wall_clock, weekday_name

logger = setup_logger(__name__)


def overlaps(a_start: datetime, a_end: datetime, b_start: datetime, b_end: datetime) -> bool:
    """Sobreposição de intervalos semiabertos: [a_start, a_end) x [b_start, b_end)."""
    return a_start < b_end and a_end > b_start


class AvailabilityService:
    """
    Disponibilidade de um(a) profissional: horário do salão + folgas e horários
    pessoais + conflitos com as visitas existentes.

    As visitas são sempre recebidas por parâmetro (nunca ficam guardadas no serviço).
    """

    def __init__(self,
                 resolver: ScheduleResolver,
                 specialists: Iterable[Union[Specialist, Mapping[str, Any]]] = ()):
        self.resolver = resolver
        self.specialists = tuple(
            s if isinstance(s, Specialist) else Specialist.model_validate(s)
            for s in specialists
        )
        self._by_id = {s.id: s for s in self.specialists}

    @property
    def tz(self):
        return self.resolver.tz

    def get_specialist(self, specialist_id: Optional[str]) -> Optional[Specialist]:
        if specialist_id is None:
            return None
        return self._by_id.get(specialist_id)

    def effective_day_schedule(self, specialist: Specialist, day: Union[date, datetime]) -> DaySchedule:
        """Horário pessoal do dia da semana (substitui por completo) ou o horário do salão."""
        override = specialist.override_for(weekday_name(day, self.tz))
        if override is not None:
            return override
        return self.resolver.resolve_day_schedule(day)

    def is_specialist_available(self,
                                specialist_id: Optional[str],
                                start: datetime,
                                end: datetime,
                                bookings: Iterable[Visit] = (),
                                exclude_visit_id: Optional[str] = None) -> bool:
        available, _ = self.check_availability(specialist_id, start, end, bookings, exclude_visit_id)
        return available

    def check_availability(self,
                           specialist_id: Optional[str],
                           start: datetime,
                           end: datetime,
                           bookings: Iterable[Visit] = (),
                           exclude_visit_id: Optional[str] = None) -> Tuple[bool, str]:
        """
        Verifica se o intervalo [start, end) pode ser agendado para o(a) profissional.
        Retorna (disponível, mensagem do primeiro critério que falhou).

        Critérios, em ordem (o primeiro que falha encerra):
            1. Salão aberto no início E no fim (apenas as duas pontas são checadas).
            2. Profissional desconhecido(a) -> disponível (vale o horário do salão).
            3. Folga pessoal na data do início.
            4. Horário efetivo do dia (pessoal ou do salão) aberto.
            5. Intervalo inteiro dentro de alguma faixa do horário efetivo.
            6. Nenhuma visita do(a) mesmo(a) profissional sobreposta.
        """
        start_wall = to_wall_clock(start, self.tz)
        end_wall = to_wall_clock(end, self.tz)

        if start_wall >= end_wall:
            return False, MESSAGES['INVALID_INTERVAL']

        # 1. Horário do salão
        if not self.resolver.is_open_at(start_wall) or not self.resolver.is_open_at(end_wall):
            return False, MESSAGES['SALON_CLOSED']

        # 2. Profissional desconhecido(a)
        specialist = self.get_specialist(specialist_id)
        if specialist is None:
            logger.debug(f"Profissional '{specialist_id}' não encontrado(a); usando apenas o horário do salão.")
            return True, MESSAGES['UNKNOWN_SPECIALIST']

        # 3. Folga
        day = to_day(start_wall)
        if specialist.is_off_on(day):
            return False, MESSAGES['SPECIALIST_OFF_DAY'].format(nome=specialist.name, data=day.isoformat())

        # 4. Horário efetivo
        schedule = self.effective_day_schedule(specialist, day)
        if not schedule.is_open:
            return False, MESSAGES['SPECIALIST_NOT_WORKING'].format(nome=specialist.name, dia=weekday_name(day))

        # 5. O intervalo precisa caber em uma faixa
        start_time = TimeOfDay.from_datetime(start_wall)
        end_time = TimeOfDay.from_datetime(end_wall)
        if not any(time_range.fits(start_time, end_time) for time_range in schedule.hours):
            return False, MESSAGES['OUTSIDE_SPECIALIST_HOURS'].format(nome=specialist.name)

        # 6. Conflitos
        conflict = self.find_conflict(specialist.id, start_wall, end_wall, bookings, exclude_visit_id)
        if conflict is not None:
            return False, MESSAGES['VISIT_CONFLICT'].format(visita=conflict.id)

        return True, MESSAGES['AVAILABLE']

    def find_conflict(self,
                      specialist_id: str,
                      start: datetime,
                      end: datetime,
                      bookings: Iterable[Visit],
                      exclude_visit_id: Optional[str] = None) -> Optional[Visit]:
        """Primeira visita do(a) profissional que se sobrepõe ao intervalo (ou None)."""
        start_wall = to_wall_clock(start, self.tz)
        end_wall = to_wall_clock(end, self.tz)

        for visit in bookings:
            # Ignora a própria visita durante a edição
            if exclude_visit_id is not None and visit.id == exclude_visit_id:
                continue
            if visit.specialist_id != specialist_id:
                continue

            visit_start = to_wall_clock(visit.start_time, self.tz)
            visit_end = to_wall_clock(visit.end_time, self.tz)
            if overlaps(start_wall, end_wall, visit_start, visit_end):
                return visit
        return None
