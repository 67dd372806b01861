"""Core types shared by the release pipeline."""

from .config import (
    ConfigError,
    GitSettings,
    ReleaseInputs,
    ReleaseSettings,
    TagPolicy,
    load_settings,
)
from .errors import ErrorCode
from .result import Err, Ok, Result

__all__ = [
    # config
    "ConfigError",
    "GitSettings",
    "ReleaseInputs",
    "ReleaseSettings",
    "TagPolicy",
    "load_settings",
    # errors
    "ErrorCode",
    # result
    "Err",
    "Ok",
    "Result",
]
