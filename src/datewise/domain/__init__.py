"""Domain layer — clock, instants, and the four date components.

This layer depends only on the stdlib and python-dateutil.
It must never import from services, commands, config, or output.
"""

from datewise.domain.calendar_math import CalendarMath
from datewise.domain.clock import Clock, FixedClock, SystemClock
from datewise.domain.converter import TimeConverter
from datewise.domain.ranges import RangeResolver
from datewise.domain.subscription import SubscriptionScheduler

__all__ = [
    "CalendarMath",
    "Clock",
    "FixedClock",
    "RangeResolver",
    "SubscriptionScheduler",
    "SystemClock",
    "TimeConverter",
]
