"""
Clock Module
Injectable time source for timestamps and effective dates
"""

from abc import ABC, abstractmethod
from datetime import date, datetime, timedelta


class Clock(ABC):
    """Time source used by services instead of calling datetime.now() directly"""

    @abstractmethod
    def now(self) -> datetime:
        ...

    def today(self) -> date:
        return self.now().date()


class SystemClock(Clock):
    """Local wall-clock time"""

    def now(self) -> datetime:
        return datetime.now()


class FixedClock(Clock):
    """
    Controlled clock for tests.
    Every call to now() returns the current instant and then moves it
    forward by `step`, so successive timestamps stay distinct.
    """

    def __init__(self, start: datetime, step: timedelta = timedelta(seconds=1)):
        self._current = start
        self._step = step

    def now(self) -> datetime:
        current = self._current
        self._current = current + self._step
        return current
