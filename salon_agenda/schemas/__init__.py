from .schedule_schema import (
    TimeRange, DaySchedule, SpecialClosure, WeeklySchedule, validate_weekly_schedule
)
from .specialist_schema import Specialist
from .visit_schema import Visit, VisitStatus, AvailableSlot, PositionedVisit
from .stats_schema import (
    StatsPeriod, TeamLoadEntry, UpcomingOffDay, NextUpVisit, PeriodSummary, TrendEntry, TrendSeries
)

__all__ = [
    "TimeRange"
    , "DaySchedule"
    , "SpecialClosure"
    , "WeeklySchedule"
    , "validate_weekly_schedule"
    , "Specialist"
    , "Visit"
    , "VisitStatus"
    , "AvailableSlot"
    , "PositionedVisit"
    , "StatsPeriod"
    , "TeamLoadEntry"
    , "UpcomingOffDay"
    , "NextUpVisit"
    , "PeriodSummary"
    , "TrendEntry"
    , "TrendSeries"
    ,
]
