from .settings_loader import Settings, load_settings

__all__ = [
    "Settings"
    , "load_settings"
    ,
]
