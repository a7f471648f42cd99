# salon_agenda/schemas/stats_schema.py
from datetime import date as Date
from typing import List, Literal

from pydantic import Field

from salon_agenda.schemas.base_schema import AgendaRecord
from salon_agenda.schemas.specialist_schema import Specialist
from salon_agenda.schemas.visit_schema import Visit

StatsPeriod = Literal['week', 'month', 'year']


class TeamLoadEntry(AgendaRecord):
    specialist: Specialist
    visit_count: int
    total_minutes: int
    available_minutes: int
    load_percent: int  # 0-100


class UpcomingOffDay(AgendaRecord):
    specialist: Specialist
    date: Date
    day_of_week: str


class NextUpVisit(AgendaRecord):
    visit: Visit
    specialist_name: str
    specialist_color: str
    time_label: str  # ex: "14:00"


class PeriodSummary(AgendaRecord):
    """Indicadores do período (visitas canceladas não entram nas contagens de volume)."""

    period: StatsPeriod
    today_visit_count: int
    period_visit_count: int
    previous_period_visit_count: int
    cancelled_count: int
    cancelled_percent: int
    completed_count: int


class TrendEntry(AgendaRecord):
    date: Date            # dia (semana/mês) ou primeiro dia do mês (ano)
    label: str            # ex: "Mon", "14" ou "Jan"
    count: int
    is_current: bool      # hoje, ou o mês atual na visão anual


class TrendSeries(AgendaRecord):
    """Série do gráfico de visitas do período (canceladas não entram)."""

    period: StatsPeriod
    entries: List[TrendEntry] = Field(default_factory=list)
    max_count: int = 1    # escala do gráfico, nunca menor que 1
