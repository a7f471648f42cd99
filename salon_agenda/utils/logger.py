# salon_agenda/utils/logger.py
import logging
import os
import sys

import colorlog

LOG_FORMAT = "%(log_color)s%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_COLORS = {
    'DEBUG': 'cyan',
    'INFO': 'green',
    'WARNING': 'yellow',
    'ERROR': 'red',
    'CRITICAL': 'bold_red,bg_white'
}


def _level_from_name(level_name: str) -> int:
    level = getattr(logging, (level_name or "DEBUG").strip().upper(), logging.DEBUG)
    return level if isinstance(level, int) else logging.DEBUG


def _resolve_level() -> int:
    """Lê o nível de log da variável LOG_LEVEL (padrão DEBUG)."""
    return _level_from_name(os.getenv("LOG_LEVEL"))


def setup_logger(name: str) -> logging.Logger:
    """
    Configura e retorna um logger colorido, garantindo que não haja duplicação
    de handlers e desabilitando a propagação para evitar logs duplicados
    com o logger raiz.
    """
    logger = logging.getLogger(name)
    logger.setLevel(_resolve_level())

    # Se o logger já tem handlers, apenas o retornamos.
    if logger.handlers:
        return logger

    handler = colorlog.StreamHandler(sys.stdout)
    formatter = colorlog.ColoredFormatter(
        LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        log_colors=LOG_COLORS,
        secondary_log_colors={},
        style='%'
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    # Impede que o logger raiz receba (e duplique) as mensagens
    logger.propagate = False

    return logger


def set_package_log_level(level_name: str, package: str = "salon_agenda") -> int:
    """
    Aplica o nível a todos os loggers do pacote já criados.

    Os módulos criam seus loggers na importação, antes de o .env ser carregado.
    """
    level = _level_from_name(level_name)
    for name, logger in list(logging.root.manager.loggerDict.items()):
        if not isinstance(logger, logging.Logger):
            continue
        if name == package or name.startswith(package + "."):
            logger.setLevel(level)
    return level
