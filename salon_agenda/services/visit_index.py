# salon_agenda/services/visit_index.py
from datetime import date, datetime, tzinfo
from typing import Dict, Iterable, List, Optional, Union

from salon_agenda.schemas.visit_schema import Visit
from salon_agenda.utils.logger import setup_logger
from salon_agenda.utils.time_utils import date_key, get_timezone, iter_days, to_day

logger = setup_logger(__name__)


def build_date_index(visits: Iterable[Visit], tz: Optional[tzinfo] = None) -> Dict[str, List[Visit]]:
    """Agrupa as visitas pela data (YYYY-MM-DD) do início. Sempre reconstruído por inteiro."""
    index: Dict[str, List[Visit]] = {}
    for visit in visits:
        index.setdefault(date_key(visit.start_time, tz), []).append(visit)
    return index


class VisitIndex:
    """
    Índice data -> visitas do dia.

    A busca por dia é O(1); por intervalo é O(dias). Como a visita pertence
    apenas ao dia do seu início, nunca é duplicada nem perdida entre dias.
    """

    def __init__(self, visits: Iterable[Visit] = (), tz: Optional[tzinfo] = None):
        self.tz = get_timezone(tz)
        self._index = build_date_index(visits, self.tz)
        logger.debug(f"Índice de visitas montado: {len(self)} visitas em {len(self._index)} dias.")

    def __len__(self) -> int:
        return sum(len(bucket) for bucket in self._index.values())

    def __contains__(self, day: Union[date, datetime]) -> bool:
        return date_key(day, self.tz) in self._index

    def dates(self) -> List[date]:
        """Datas com pelo menos uma visita, em ordem."""
        return sorted(date.fromisoformat(key) for key in self._index)

    def get_visits_for_date(self,
                            day: Union[date, datetime],
                            specialist_id: Optional[str] = None) -> List[Visit]:
        """Visitas do dia (lista nova; vazia se não houver)."""
        bucket = self._index.get(date_key(day, self.tz), [])
        if specialist_id is not None:
            return [v for v in bucket if v.specialist_id == specialist_id]
        return list(bucket)

    def get_visits_for_range(self,
                             start: Union[date, datetime],
                             end: Union[date, datetime],
                             specialist_id: Optional[str] = None) -> List[Visit]:
        """Concatena os dias de [start, end] (inclusive), em ordem de dia."""
        visits: List[Visit] = []
        for day in iter_days(to_day(start, self.tz), to_day(end, self.tz)):
            visits.extend(self.get_visits_for_date(day, specialist_id))
        return visits
