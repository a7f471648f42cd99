# salon_agenda/schemas/specialist_schema.py
from datetime import date as Date
from typing import List, Optional

from pydantic import Field

from salon_agenda.schemas.base_schema import AgendaRecord
from salon_agenda.schemas.schedule_schema import DaySchedule, WeeklySchedule


class Specialist(AgendaRecord):
    """Profissional que pode ser agendado(a), com exceções pessoais sobre o horário do salão."""

    id: str
    name: str
    role: str = ""
    color: Optional[str] = None
    avatar_url: Optional[str] = None

    # Folgas pessoais (dias inteiros)
    off_days: List[Date] = Field(default_factory=list)

    # Quando a chave do dia existe, substitui por completo o horário do salão (não mescla)
    availability_overrides: Optional[WeeklySchedule] = None

    def is_off_on(self, day: Date) -> bool:
        return day in self.off_days

    def override_for(self, weekday: str) -> Optional[DaySchedule]:
        if not self.availability_overrides:
            return None
        return self.availability_overrides.get(weekday)
