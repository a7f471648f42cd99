# salon_agenda/schemas/visit_schema.py
from datetime import date as Date, datetime
from typing import List, Literal, Optional

from pydantic import Field, model_validator

from salon_agenda.schemas.base_schema import AgendaRecord
from salon_agenda.utils.time_utils import HHMM_PATTERN, TimeOfDay, minutes_between

VisitStatus = Literal['pending', 'confirmed', 'completed', 'cancelled']


class Visit(AgendaRecord):
    """Agendamento. Sem ``specialist_id`` a visita não está atribuída a ninguém."""

    id: str
    specialist_id: Optional[str] = None
    client_id: Optional[str] = None
    client_name: str = ""
    client_phone: Optional[str] = None
    service_ids: List[str] = Field(default_factory=list)
    custom_tags: List[str] = Field(default_factory=list)

    start_time: datetime
    end_time: datetime

    status: VisitStatus = 'pending'
    is_confirmed: bool = False

    @model_validator(mode="after")
    def _check_interval(self) -> "Visit":
        if self.start_time >= self.end_time:
            raise ValueError(f"Visita {self.id}: start_time deve ser anterior a end_time")
        return self

    @property
    def duration_minutes(self) -> int:
        return minutes_between(self.start_time, self.end_time)

    @property
    def is_cancelled(self) -> bool:
        return self.status == 'cancelled'


class AvailableSlot(AgendaRecord):
    """Horário livre encontrado pela busca (derivado, não persistido)."""

    specialist_id: str
    date: Date
    start_time: str = Field(..., pattern=HHMM_PATTERN)
    end_time: str = Field(..., pattern=HHMM_PATTERN)

    @property
    def start(self) -> datetime:
        return TimeOfDay.parse(self.start_time).on(self.date)

    @property
    def end(self) -> datetime:
        return TimeOfDay.parse(self.end_time).on(self.date)


class PositionedVisit(Visit):
    """Visita com a geometria da coluna do dia (válida apenas para a renderização que a gerou)."""

    lane: int = 0
    top: float
    height: float
    left: float
    width: float
