"""Process-wide 3D render capability check.

The check runs once per process and is memoized. Tests and hosts that change
the environment call ``reset_render_capability`` to force a fresh probe.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from functools import lru_cache

logger = logging.getLogger(__name__)

RENDER_ENV_VAR = "FURNISH_RENDER_3D"

_DISABLED_VALUES = frozenset({"0", "false", "no", "off"})


def env_render_probe() -> bool:
    """Default probe: 3D rendering is on unless the env var disables it."""
    value = os.environ.get(RENDER_ENV_VAR, "1").strip().lower()
    return value not in _DISABLED_VALUES


_probe: Callable[[], bool] = env_render_probe


@lru_cache(maxsize=1)
def detect_render_capability() -> bool:
    """Whether the presentation layer can render the 3D scene."""
    available = bool(_probe())
    logger.debug(f"3D render capability: {available}")
    return available


def reset_render_capability() -> None:
    """Forget the memoized result so the next call probes again."""
    detect_render_capability.cache_clear()


def set_render_probe(probe: Callable[[], bool] | None) -> None:
    """Install a custom probe, or restore the default with None.

    Also resets the memoized result.
    """
    global _probe
    _probe = probe if probe is not None else env_render_probe
    reset_render_capability()
