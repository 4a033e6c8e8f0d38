# Utils Package
# Utility Functions and Helpers

from .logger import logger, setup_logger
from .helpers import *
from .constants import *
from .decorators import retry, timed
from .clock import Clock, SystemClock, FixedClock

__all__ = [
    "logger",
    "setup_logger",
    "retry",
    "timed",
    "Clock",
    "SystemClock",
    "FixedClock"
]
