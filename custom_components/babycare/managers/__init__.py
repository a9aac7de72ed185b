"""Manager modules for BabyCare integration.

Managers own record lists and the statistics cache. They are stateful,
event-aware, and sit between the coordinator and the pure engines.
"""

from .base_manager import BaseManager
from .meal_manager import MealManager
from .milestone_manager import MilestoneManager
from .record_manager import RecordManager
from .sleep_manager import SleepManager
from .statistics_manager import StatisticsManager

__all__ = [
    "BaseManager",
    "MealManager",
    "MilestoneManager",
    "RecordManager",
    "SleepManager",
    "StatisticsManager",
]
