# salon_agenda/services/schedule_resolver.py
"""
Resolução do horário do salão para uma data: modelo semanal + fechamentos
especiais. Configuração ausente nunca gera exceção, vira "fechado".
"""

from datetime import date, datetime, tzinfo
from typing import Any, Iterable, List, Mapping, Optional, Union

from salon_agenda.schemas.schedule_schema import DaySchedule, SpecialClosure, validate_weekly_schedule
from salon_agenda.utils.logger import setup_logger
from salon_agenda.utils.time_utils import TimeOfDay, get_timezone, to_day, to_wall_clock, weekday_name

logger = setup_logger(__name__)


class ScheduleResolver:
    """Horário efetivo do salão (aberto/fechado e faixas) em uma data."""

    def __init__(self,
                 weekly_schedule: Optional[Mapping[str, Any]] = None,
                 closures: Iterable[Union[SpecialClosure, Mapping[str, Any]]] = (),
                 tz: Optional[tzinfo] = None):
        self.weekly_schedule = validate_weekly_schedule(weekly_schedule or {})
        self.closures = tuple(
            c if isinstance(c, SpecialClosure) else SpecialClosure.model_validate(c)
            for c in closures
        )
        self.tz = get_timezone(tz)
        self._closed_dates = {c.date: c for c in self.closures}

    def closure_for(self, day: Union[date, datetime]) -> Optional[SpecialClosure]:
        """Fechamento especial da data, se houver (útil para mostrar o motivo)."""
        return self._closed_dates.get(to_day(day, self.tz))

    def is_closed_on(self, day: Union[date, datetime]) -> bool:
        return not self.resolve_day_schedule(day).is_open

    def resolve_day_schedule(self, day: Union[date, datetime]) -> DaySchedule:
        """
        1. Data com fechamento especial -> fechado.
        2. Senão, o horário semanal do dia da semana (fechado se a chave não existir).
        """
        target = to_day(day, self.tz)

        if target in self._closed_dates:
            return DaySchedule.closed()

        return self.weekly_schedule.get(weekday_name(target)) or DaySchedule.closed()

    def is_open_at(self, moment: datetime) -> bool:
        """O salão está aberto no instante? Faixas semiabertas [abertura, fechamento)."""
        schedule = self.resolve_day_schedule(moment)
        if not schedule.is_open:
            return False

        moment_time = TimeOfDay.from_datetime(to_wall_clock(moment, self.tz))
        return any(time_range.contains(moment_time) for time_range in schedule.hours)


# =========================================================
# EDIÇÃO DA LISTA DE FECHAMENTOS (funções puras)
# =========================================================
def add_special_closure(closures: Iterable[SpecialClosure], closure: SpecialClosure) -> List[SpecialClosure]:
    """Retorna uma nova lista com o fechamento; a mesma data substitui o anterior."""
    updated = [c for c in closures if c.date != closure.date]
    updated.append(closure)
    logger.info(f"Fechamento especial adicionado: {closure.date.isoformat()} ({closure.reason})")
    return updated


def remove_special_closure(closures: Iterable[SpecialClosure], day: date) -> List[SpecialClosure]:
    """Retorna uma nova lista sem o fechamento da data."""
    updated = [c for c in closures if c.date != day]
    logger.info(f"Fechamento especial removido: {day.isoformat()}")
    return updated
