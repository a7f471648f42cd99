from .system_message import MESSAGES
from .logger import set_package_log_level, setup_logger

__all__ = [
    "MESSAGES"
    , "setup_logger"
    , "set_package_log_level"
    ,
]
