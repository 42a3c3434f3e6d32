"""Runtime settings, read from the environment."""
import os
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

ENV_PREFIX = "INFIX_CALC_"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseModel):
    """
    Calculator settings.

    Attributes
    ----------
    strict : bool
        Reject expressions that leave extra operands on the value stack.
    log_level : str
        Level of the package logger.
    """

    model_config = ConfigDict(frozen=True)

    strict: bool = Field(default=False, description="Reject leftover operands")
    log_level: str = Field(default="WARNING", description="Package log level")

    @field_validator("log_level")
    def log_level_must_be_known(cls, v: str) -> str:
        """Normalize the level name and ensure it is a standard logging level."""
        level = v.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level {v!r}, expected one of {', '.join(LOG_LEVELS)}")
        return level

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from ``INFIX_CALC_*`` environment variables.

        :param Mapping environ: Variables to read, defaults to ``os.environ``

        :return: Validated settings
        :rtype: Settings
        :raises pydantic.ValidationError: If a variable holds an invalid value
        """
        environ = os.environ if environ is None else environ
        values = {}
        for name in cls.model_fields:
            key = f"{ENV_PREFIX}{name.upper()}"
            if key in environ:
                values[name] = environ[key]
        return cls(**values)
