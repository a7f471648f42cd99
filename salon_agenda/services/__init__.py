from .schedule_resolver import ScheduleResolver, add_special_closure, remove_special_closure
from .availability_service import AvailabilityService, overlaps
from .slot_search_service import SlotSearchService
from .visit_index import VisitIndex, build_date_index
from .lane_packer import assign_lanes, compute_positioned_visits
from .stats_service import StatsService, period_bounds, previous_period_bounds

__all__ = [
    "ScheduleResolver"
    , "add_special_closure"
    , "remove_special_closure"
    , "AvailabilityService"
    , "overlaps"
    , "SlotSearchService"
    , "VisitIndex"
    , "build_date_index"
    , "assign_lanes"
    , "compute_positioned_visits"
    , "StatsService"
    , "period_bounds"
    , "previous_period_bounds"
    ,
]
