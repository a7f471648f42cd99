from .factory import SchedulingEngine, create_scheduling_engine

__all__ = [
    "SchedulingEngine"
    , "create_scheduling_engine"
    ,
]
