"""Configuration for stockpile.

Holds the settings that control contract checking. The active configuration
lives in a context variable, so a change made in one thread or task is never
seen by another.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, replace
from typing import Any, Generator

__all__ = [
    "Config",
    "configured",
    "get_config",
    "set_config",
]

_LOG = logging.getLogger(__name__)


@dataclass(frozen=True)
class Config:
    """Settings for collection construction and edits.

    Attributes:
        strict: Validate that mapping keys are strings and that no value is
            None or Missing. Disable to skip the per-entry checks.
    """

    strict: bool = True


_CONFIG: ContextVar[Config] = ContextVar("stockpile_config", default=Config())


def get_config() -> Config:
    return _CONFIG.get()


def set_config(config: Config) -> Config:
    """Replace the configuration for the current context.

    Args:
        config: The new configuration.

    Returns:
        The configuration that was in effect before.
    """
    previous = _CONFIG.get()
    _CONFIG.set(config)
    _LOG.debug("Config changed from %s to %s", previous, config)
    return previous


@contextmanager
def configured(**changes: Any) -> Generator[Config, None, None]:
    """Apply configuration changes for the duration of a with block.

    Only the current thread or task sees the changes.

    Example:
        >>> with configured(strict=False):
        ...     get_config().strict
        False
    """
    config = replace(get_config(), **changes)
    token = _CONFIG.set(config)
    _LOG.debug("Config changed to %s", config)
    try:
        yield config
    finally:
        _CONFIG.reset(token)
