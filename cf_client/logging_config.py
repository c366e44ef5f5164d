# cf_client/logging_config.py
import logging
import sys
from typing import Union

from cf_client.exceptions import ConfigurationError

# Имя базового логгера для всего клиента
SDK_LOGGER_NAME = "cf_client"


def resolve_log_level(level: Union[int, str]) -> int:
    """Приводит имя уровня ('debug', 'INFO', ...) или число к числовому уровню logging."""
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).strip().upper())
    if not isinstance(resolved, int):
        raise ConfigurationError(f"Unknown logging level: {level!r}")
    return resolved


def setup_sdk_logging(
    level: Union[int, str] = logging.INFO,
    log_format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
):
    """Настраивает базовый логгер клиента."""
    level = resolve_log_level(level)
    logger = logging.getLogger(SDK_LOGGER_NAME)

    # Предотвращаем дублирование обработчиков при повторном вызове
    if logger.handlers:
        logger.debug(f"Logger '{SDK_LOGGER_NAME}' already has handlers. Skipping setup.")
        return logger

    logger.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(log_format))
    logger.addHandler(handler)

    logger.debug(
        f"SDK Logging setup complete for '{SDK_LOGGER_NAME}' at level {logging.getLevelName(level)}"
    )
    return logger


def get_sdk_logger(name: str = SDK_LOGGER_NAME) -> logging.Logger:
    """Возвращает экземпляр логгера клиента (или его дочерний)."""
    return logging.getLogger(name)
