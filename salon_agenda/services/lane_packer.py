# salon_agenda/services/lane_packer.py
"""
Distribuição das visitas de um dia em colunas ("lanes") lado a lado.

Algoritmo guloso clássico de particionamento de intervalos: cada visita vai
para a primeira coluna livre. Não garante o mínimo global de colunas, mas
nunca coloca duas visitas sobrepostas na mesma coluna e é determinístico
(empates mantêm a ordem original, pois a ordenação é estável).
"""

from datetime import datetime, timedelta, tzinfo
from typing import Iterable, List, Optional, Tuple

from salon_agenda.schemas.visit_schema import PositionedVisit, Visit
from salon_agenda.utils.constants import HOUR_HEIGHT, TIMELINE_START_HOUR
from salon_agenda.utils.time_utils import minutes_between, start_of_day, to_wall_clock


def assign_lanes(day_visits: Iterable[Visit], tz: Optional[tzinfo] = None) -> Tuple[List[Tuple[Visit, int]], int]:
    """Retorna [(visita, coluna)] em ordem de início e o total de colunas abertas."""
    ordered = sorted(day_visits, key=lambda v: to_wall_clock(v.start_time, tz))

    # fim da última visita de cada coluna
    lanes: List[datetime] = []
    assigned: List[Tuple[Visit, int]] = []

    for visit in ordered:
        start = to_wall_clock(visit.start_time, tz)
        end = to_wall_clock(visit.end_time, tz)

        lane_index = next((i for i, lane_end in enumerate(lanes) if lane_end <= start), None)
        if lane_index is None:
            lane_index = len(lanes)
            lanes.append(end)
        else:
            lanes[lane_index] = end

        assigned.append((visit, lane_index))

    return assigned, len(lanes)


def compute_positioned_visits(day_visits: Iterable[Visit],
                              hour_height: float = HOUR_HEIGHT,
                              day_start_hour: int = TIMELINE_START_HOUR,
                              tz: Optional[tzinfo] = None) -> List[PositionedVisit]:
    """
    Geometria de cada visita na coluna do dia:
        top    = minutos desde o início da grade / 60 x hour_height
        height = duração / 60 x hour_height
        left   = coluna / total de colunas x 100 (%)
        width  = 100 / total de colunas (%)

    Todas as visitas do dia usam o mesmo total de colunas (larguras uniformes).
    """
    assigned, lane_count = assign_lanes(day_visits, tz)
    max_lanes = lane_count or 1

    positioned: List[PositionedVisit] = []
    for visit, lane in assigned:
        start = to_wall_clock(visit.start_time, tz)
        end = to_wall_clock(visit.end_time, tz)
        grid_start = start_of_day(start) + timedelta(hours=day_start_hour)

        positioned.append(PositionedVisit(
            **visit.model_dump(),
            lane=lane,
            top=minutes_between(grid_start, start) / 60 * hour_height,
            height=minutes_between(start, end) / 60 * hour_height,
            left=lane / max_lanes * 100,
            width=100 / max_lanes,
        ))

    return positioned
