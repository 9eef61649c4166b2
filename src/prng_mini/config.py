"""
Runtime settings and logging setup.

Settings come from environment variables so the same code works for the
command line tool, the web service and the tests:

    export PRNG_MINI_ENTROPY_DEVICE='/dev/urandom'   # empty -> os.urandom
    export PRNG_MINI_UNBIASED='1'                    # rejection sampling
    export PRNG_MINI_DEFAULT_SIGNATURE='210'
    export PRNG_MINI_LOG_LEVEL='INFO'
"""

import logging
import os
from dataclasses import dataclass

from .core.errors import InvalidArgument

DEFAULT_ENTROPY_DEVICE = "/dev/urandom" if os.name == "posix" else ""
DEFAULT_SIGNATURE = 210
DEFAULT_LOG_LEVEL = "WARNING"

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


@dataclass(frozen=True)
class Settings:
    entropy_device: str = DEFAULT_ENTROPY_DEVICE
    unbiased: bool = False
    default_signature: int = DEFAULT_SIGNATURE
    log_level: str = DEFAULT_LOG_LEVEL


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name, "")
    if not raw:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "")
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise InvalidArgument(f"Invalid {name} value: {raw}") from None


def entropy_device() -> str:
    return os.getenv("PRNG_MINI_ENTROPY_DEVICE", DEFAULT_ENTROPY_DEVICE)


def unbiased() -> bool:
    return _env_bool("PRNG_MINI_UNBIASED", False)


def load_settings() -> Settings:
    """Read the current settings from the environment."""
    return Settings(
        entropy_device=entropy_device(),
        unbiased=unbiased(),
        default_signature=_env_int("PRNG_MINI_DEFAULT_SIGNATURE", DEFAULT_SIGNATURE),
        log_level=os.getenv("PRNG_MINI_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
    )


def configure_logging(level=None) -> None:
    """
    Configure root logging for the command line tool and the web service.

    Library modules only create loggers; handlers are installed here.
    """
    if level is None:
        level = load_settings().log_level
    numeric_level = logging.getLevelName(str(level).upper())
    if not isinstance(numeric_level, int):
        raise InvalidArgument(f"Invalid log level: {level}")
    logging.basicConfig(level=numeric_level, format=LOG_FORMAT)
