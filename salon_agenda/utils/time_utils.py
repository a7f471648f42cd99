# salon_agenda/utils/time_utils.py
"""
Primitivas de tempo da agenda.

Modelo de tempo (regra única de conversão):
    - Um dia de atendimento é um ``datetime.date`` sem fuso.
    - Um instante pode chegar "naive" ou com fuso. Naive já é o horário de
      parede do salão; com fuso, é convertido para o fuso do salão e o tzinfo
      é descartado (``to_wall_clock``).
    - Toda projeção de dia da semana, data e ``HH:mm`` passa por essa regra.
"""

import math
import re
from datetime import date, datetime, time, timedelta, tzinfo
from functools import total_ordering
from typing import Iterator, List, Optional, Union

import pytz

from salon_agenda.utils.constants import (
    WEEKDAY_MAP, SLOT_STEP_MINUTES, GRID_START_HOUR, GRID_END_HOUR, GRID_SLOT_MINUTES
)

HHMM_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"
_HHMM_RE = re.compile(HHMM_PATTERN)

DayLike = Union[date, datetime]


@total_ordering
class TimeOfDay:
    """Horário de parede (minutos desde a meia-noite). ``str()`` sempre devolve HH:mm."""

    __slots__ = ("minutes",)

    def __init__(self, minutes: int):
        if not 0 <= minutes < 24 * 60:
            raise ValueError(f"Minutos fora do dia: {minutes}")
        self.minutes = minutes

    @classmethod
    def parse(cls, value: str) -> "TimeOfDay":
        if not isinstance(value, str) or not _HHMM_RE.match(value):
            raise ValueError(f"Horário inválido (esperado HH:mm): {value!r}")
        hours, minutes = value.split(":")
        return cls(int(hours) * 60 + int(minutes))

    @classmethod
    def from_datetime(cls, value: Union[datetime, time]) -> "TimeOfDay":
        return cls(value.hour * 60 + value.minute)

    @property
    def hour(self) -> int:
        return self.minutes // 60

    @property
    def minute(self) -> int:
        return self.minutes % 60

    def to_time(self) -> time:
        return time(self.hour, self.minute)

    def on(self, day: date) -> datetime:
        """Combina o horário com um dia (datetime naive, horário de parede)."""
        return datetime.combine(day, self.to_time())

    def __eq__(self, other):
        if not isinstance(other, TimeOfDay):
            return NotImplemented
        return self.minutes == other.minutes

    def __lt__(self, other):
        if not isinstance(other, TimeOfDay):
            return NotImplemented
        return self.minutes < other.minutes

    def __hash__(self):
        return hash(self.minutes)

    def __str__(self):
        return f"{self.hour:02d}:{self.minute:02d}"

    def __repr__(self):
        return f"TimeOfDay({str(self)!r})"


# =========================================================
# FUSO HORÁRIO
# =========================================================
def get_timezone(tz: Optional[Union[str, tzinfo]] = None) -> tzinfo:
    """Resolve o fuso do salão (padrão UTC)."""
    if tz is None:
        return pytz.UTC
    if isinstance(tz, str):
        return pytz.timezone(tz)
    return tz


def to_wall_clock(value: datetime, tz: Optional[tzinfo] = None) -> datetime:
    """Projeta um instante no horário de parede do salão (sempre naive)."""
    if value.tzinfo is None:
        return value
    return value.astimezone(get_timezone(tz)).replace(tzinfo=None)


def from_wall_clock(value: datetime, tz: Optional[tzinfo] = None, aware: bool = False) -> datetime:
    """Inverso de ``to_wall_clock``: localiza o horário de parede quando ``aware``."""
    if not aware:
        return value
    zone = get_timezone(tz)
    if hasattr(zone, "localize"):
        return zone.localize(value)
    return value.replace(tzinfo=zone)


def to_day(value: DayLike, tz: Optional[tzinfo] = None) -> date:
    """Dia de calendário de um ``date`` ou instante (segundo o modelo de tempo)."""
    if isinstance(value, datetime):
        return to_wall_clock(value, tz).date()
    return value


# =========================================================
# ARREDONDAMENTO E FORMATAÇÃO
# =========================================================
def round_up_to_step(value: datetime, step_minutes: int = SLOT_STEP_MINUTES) -> datetime:
    """Arredonda para cima até a próxima fronteira da grade (valores alinhados não mudam)."""
    floored = value.replace(minute=value.minute - value.minute % step_minutes, second=0, microsecond=0)
    if floored == value:
        return value
    return floored + timedelta(minutes=step_minutes)


def round_to_nearest(value: datetime, step_minutes: int = SLOT_STEP_MINUTES) -> datetime:
    """Arredonda para a fronteira mais próxima da grade (meio arredonda para cima)."""
    rounded = math.floor(value.minute / step_minutes + 0.5) * step_minutes
    return value.replace(minute=0, second=0, microsecond=0) + timedelta(minutes=rounded)


def weekday_name(value: DayLike, tz: Optional[tzinfo] = None) -> str:
    return WEEKDAY_MAP[to_day(value, tz).weekday()]


def date_key(value: DayLike, tz: Optional[tzinfo] = None) -> str:
    """Chave YYYY-MM-DD usada pelo índice de visitas."""
    return to_day(value, tz).isoformat()


def format_time(value: Union[datetime, time]) -> str:
    return value.strftime("%H:%M")


def start_of_day(value: DayLike) -> datetime:
    if isinstance(value, datetime):
        value = value.date()
    return datetime.combine(value, time.min)


def minutes_between(start: datetime, end: datetime) -> int:
    return int((end - start).total_seconds() // 60)


def iter_days(start: date, end: date) -> Iterator[date]:
    """Dias de calendário em [start, end], inclusive."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def generate_time_slots(day: Optional[date] = None,
                        start_hour: int = GRID_START_HOUR,
                        end_hour: int = GRID_END_HOUR,
                        step_minutes: int = GRID_SLOT_MINUTES) -> List[datetime]:
    """Rótulos da grade da visão diária (ex: 08:00, 08:30, ... 19:30)."""
    base = start_of_day(day or date.today())
    current = base + timedelta(hours=start_hour)
    end = base + timedelta(hours=end_hour)

    slots: List[datetime] = []
    while current < end:
        slots.append(current)
        current += timedelta(minutes=step_minutes)
    return slots
