"""
Configuration & Constants
=========================
This module serves as the central registry for numeric constants and
environment-driven settings.

Why is this file needed?
------------------------
1. Abstraction: It prevents magic numbers (tolerances, sampling densities)
   from being scattered throughout the geometry code.
2. Deployment: It reads the few settings that may be changed from the
   environment without touching code.

Exports:
    CLIP_EPSILON (float): Tolerance of the side-band clipper.
    DEFAULT_CIRCLE_SEGMENTS (int): Sampling of construction circles.
    DEFAULT_CURVE_SEGMENTS (int): Sampling of feature curves.
    DEFAULT_CANVAS_SIZE (tuple[int, int]): Canvas used when none is given.
"""
import logging
import os


# Global Constants
CLIP_EPSILON: float = 1e-6
DEFAULT_CIRCLE_SEGMENTS: int = 64
DEFAULT_CURVE_SEGMENTS: int = 32
DEFAULT_CANVAS_SIZE: tuple[int, int] = (1920, 1080)

LOG_LEVEL_ENV: str = "LOOMISHEAD_LOG_LEVEL"


def get_log_level() -> int:
    """
    Resolve the logging level from the environment.

    Accepts level names ("DEBUG", "info", ...) or numeric values. Unknown
    values fall back to INFO.
    """
    raw = os.environ.get(LOG_LEVEL_ENV, "").strip()
    if not raw:
        return logging.INFO
    if raw.isdigit():
        return int(raw)

    level = logging.getLevelName(raw.upper())
    if isinstance(level, int):
        return level
    return logging.INFO
