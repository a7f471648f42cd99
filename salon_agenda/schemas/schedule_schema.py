# salon_agenda/schemas/schedule_schema.py
from datetime import date as Date
from typing import Annotated, Any, Dict, List, Mapping

from pydantic import BeforeValidator, Field, TypeAdapter, model_validator

from salon_agenda.schemas.base_schema import AgendaRecord
from salon_agenda.utils.constants import WEEKDAY_NAMES
from salon_agenda.utils.time_utils import HHMM_PATTERN, TimeOfDay


class TimeRange(AgendaRecord):
    """Faixa de atendimento de um dia (HH:mm, 24h). Não existem faixas que viram a noite."""

    open_time: str = Field(..., pattern=HHMM_PATTERN, description="Abertura (inclusiva), ex: 09:00")
    close_time: str = Field(..., pattern=HHMM_PATTERN, description="Fechamento (exclusivo), ex: 19:00")

    @model_validator(mode="after")
    def _check_order(self) -> "TimeRange":
        if self.opens >= self.closes:
            raise ValueError(f"open_time ({self.open_time}) deve ser anterior a close_time ({self.close_time})")
        return self

    @property
    def opens(self) -> TimeOfDay:
        return TimeOfDay.parse(self.open_time)

    @property
    def closes(self) -> TimeOfDay:
        return TimeOfDay.parse(self.close_time)

    def contains(self, moment: TimeOfDay) -> bool:
        """Intervalo semiaberto [open_time, close_time)."""
        return self.opens <= moment < self.closes

    def fits(self, start: TimeOfDay, end: TimeOfDay) -> bool:
        """O intervalo [start, end) cabe inteiro nesta faixa."""
        return start >= self.opens and end <= self.closes


class DaySchedule(AgendaRecord):
    """Horário de um dia. Se ``is_open`` é falso, ``hours`` é ignorado."""

    is_open: bool = False
    hours: List[TimeRange] = Field(default_factory=list)

    @classmethod
    def closed(cls) -> "DaySchedule":
        return cls(is_open=False, hours=[])


class SpecialClosure(AgendaRecord):
    """Fechamento do salão inteiro em uma data específica."""

    date: Date
    reason: str = ""


def normalize_weekday_keys(value: Any) -> Any:
    """Padroniza as chaves do horário semanal e rejeita dias desconhecidos."""
    if not isinstance(value, Mapping):
        return value

    normalized = {}
    for key, day in value.items():
        weekday = str(key).strip().lower()
        if weekday not in WEEKDAY_NAMES:
            raise ValueError(f"Dia da semana desconhecido: {key!r}")
        normalized[weekday] = day
    return normalized


# Horário semanal: chave = dia da semana em inglês, minúsculo (monday ... sunday)
WeeklySchedule = Annotated[Dict[str, DaySchedule], BeforeValidator(normalize_weekday_keys)]

_weekly_adapter = TypeAdapter(WeeklySchedule)


def validate_weekly_schedule(value: Mapping[str, Any]) -> Dict[str, DaySchedule]:
    """Valida um horário semanal vindo da interface (dicts ou DaySchedule)."""
    return _weekly_adapter.validate_python(value or {})
