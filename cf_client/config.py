# cf_client/config.py
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    SettingsConfigDict,
)

_LOGGING_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class ClientSettings(BaseSettings):
    API_URL: str = Field(
        ...,
        description="Базовый URL Cloud Controller API, например https://api.example.com",
    )
    AUTH_TOKEN: Optional[str] = Field(
        None, description="Bearer токен (с префиксом 'bearer ' или без него)."
    )
    REQUEST_TIMEOUT: float = Field(10.0, gt=0)
    CONNECT_TIMEOUT: float = Field(5.0, gt=0)
    VERIFY_SSL: bool = True
    USER_AGENT: str = "cf-client-python"
    LOGGING_LEVEL: str = Field(
        "INFO",
        json_schema_extra={"examples": ["DEBUG", "INFO", "WARNING", "ERROR"]}
    )

    model_config = SettingsConfigDict(
        env_prefix="CF_",
        extra='ignore',
    )

    @field_validator("LOGGING_LEVEL")
    @classmethod
    def check_logging_level(cls, value: str) -> str:
        value = value.strip().upper()
        if value not in _LOGGING_LEVELS:
            raise ValueError(f"LOGGING_LEVEL must be one of {', '.join(_LOGGING_LEVELS)}")
        return value
