# salon_agenda/config/settings_loader.py
import os
from datetime import tzinfo
from pathlib import Path
from typing import Optional, Union

import pytz
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

from salon_agenda.utils.constants import (
    SLOT_STEP_MINUTES, MAX_SLOT_RESULTS, SEARCH_HORIZON_DAYS, HOUR_HEIGHT, TIMELINE_START_HOUR
)
from salon_agenda.utils.logger import set_package_log_level, setup_logger

logger = setup_logger(__name__)

# Caminho absoluto até o diretório base do projeto (volta 2 níveis a partir de salon_agenda/config/)
BASE_DIR = Path(__file__).resolve().parent.parent.parent
DEFAULT_ENV_PATH = BASE_DIR / "config" / ".env"

# campo do Settings -> variável de ambiente
ENV_VARS = {
    "salon_timezone": "SALON_TIMEZONE",
    "slot_step_minutes": "SLOT_STEP_MINUTES",
    "slot_search_limit": "SLOT_SEARCH_LIMIT",
    "slot_search_days": "SLOT_SEARCH_DAYS",
    "timeline_hour_height": "TIMELINE_HOUR_HEIGHT",
    "timeline_start_hour": "TIMELINE_START_HOUR",
    "log_level": "LOG_LEVEL",
}


class Settings(BaseModel):
    """Configuração do motor de agenda."""

    salon_timezone: str = "UTC"
    slot_step_minutes: int = Field(SLOT_STEP_MINUTES, gt=0, le=60)
    slot_search_limit: int = Field(MAX_SLOT_RESULTS, gt=0)
    slot_search_days: int = Field(SEARCH_HORIZON_DAYS, gt=0)
    timeline_hour_height: float = Field(HOUR_HEIGHT, gt=0)
    timeline_start_hour: int = Field(TIMELINE_START_HOUR, ge=0, le=23)
    log_level: str = "DEBUG"

    model_config = ConfigDict(frozen=True)

    @field_validator("salon_timezone")
    @classmethod
    def _check_timezone(cls, value: str) -> str:
        try:
            pytz.timezone(value)
        except pytz.UnknownTimeZoneError:
            raise ValueError(f"Fuso horário desconhecido: {value}")
        return value

    @field_validator("slot_step_minutes")
    @classmethod
    def _check_step(cls, value: int) -> int:
        # A grade precisa fechar a hora (15, 20, 30...)
        if 60 % value != 0:
            raise ValueError(f"SLOT_STEP_MINUTES deve dividir 60 (recebido {value})")
        return value

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.strip().upper()

    @property
    def tz(self) -> tzinfo:
        return pytz.timezone(self.salon_timezone)


def load_settings(env_path: Optional[Union[str, Path]] = None) -> Settings:
    """Carrega o .env (quando existe) e monta o Settings a partir das variáveis de ambiente."""
    env_path = Path(env_path) if env_path else DEFAULT_ENV_PATH

    if env_path.exists():
        load_dotenv(dotenv_path=env_path, override=True)
        logger.info(f"Arquivo .env carregado de: {env_path}")
    else:
        logger.debug(f"Arquivo .env não encontrado em {env_path}; usando apenas variáveis de ambiente.")

    values = {}
    for field_name, env_name in ENV_VARS.items():
        raw = os.getenv(env_name)
        if raw is not None and raw.strip() != "":
            values[field_name] = raw.strip()

    settings = Settings(**values)

    # Os loggers dos módulos já existem: propaga o nível carregado
    set_package_log_level(settings.log_level)
    logger.debug(f"Configuração da agenda: {settings.model_dump()}")
    return settings
