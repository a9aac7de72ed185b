"""Test helpers for BabyCare integration tests.

This module re-exports all helpers for convenient imports:

    from tests.helpers import (
        make_sleep_record, make_meal_record, make_milestone,
        call_service,
    )

See individual modules for full documentation:
- factories.py: Stored record builders
- services.py: Service call shortcuts
"""

from tests.helpers.factories import make_meal_record, make_milestone, make_sleep_record
from tests.helpers.services import call_service

__all__ = [
    "call_service",
    "make_meal_record",
    "make_milestone",
    "make_sleep_record",
]
