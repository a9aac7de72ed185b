# File: utils/__init__.py
"""Pure Python utilities for BabyCare.

This module contains pure Python functions with ZERO Home Assistant dependencies.
All functions here can be unit tested without Home Assistant mocking.

⚠️ UTILS PURITY: NO `homeassistant.*` imports allowed in this module.

Submodules:
    - dt_utils: Date/time parsing, formatting, calendar arithmetic
    - math_utils: Hour conversion, rounding, progress calculations

Usage:
    from . import dt_utils
    from .math_utils import seconds_to_hours
"""

from . import dt_utils, math_utils

__all__ = ["dt_utils", "math_utils"]
