# File: flow_helpers.py
"""Helpers for the BabyCare integration's Config and Options flow.

Provides schema builders and input processing shared by both flows:
- build_profile_schema: baby name and water goal (config flow)
- build_general_options_schema: water goal, update interval, window sizes
- validate_water_goal / build_options_data: input checks and normalization
"""

from __future__ import annotations

from typing import Any

import voluptuous as vol
from homeassistant.helpers import selector

from . import const

# Option key -> (default, max) for the statistics window sizes
_WINDOW_LIMITS = {
    const.CONF_DAILY_WINDOW: (const.DEFAULT_DAILY_WINDOW, 90),
    const.CONF_WEEKLY_WINDOW: (const.DEFAULT_WEEKLY_WINDOW, 52),
    const.CONF_MONTHLY_WINDOW: (const.DEFAULT_MONTHLY_WINDOW, 24),
    const.CONF_YEARLY_WINDOW: (const.DEFAULT_YEARLY_WINDOW, 10),
}


def _number_selector(min_value: int, max_value: int | None = None):
    """Return a box-mode integer NumberSelector."""
    config: dict[str, Any] = {
        "mode": selector.NumberSelectorMode.BOX,
        "min": min_value,
        "step": 1,
    }
    if max_value is not None:
        config["max"] = max_value
    return selector.NumberSelector(selector.NumberSelectorConfig(**config))


def _water_goal_selector():
    """Return the water goal selector (ml)."""
    return selector.NumberSelector(
        selector.NumberSelectorConfig(
            mode=selector.NumberSelectorMode.BOX,
            min=0,
            step=50,
            unit_of_measurement="mL",
        )
    )


def build_profile_schema(default: dict[str, Any] | None = None) -> vol.Schema:
    """Build schema for the baby profile step."""
    default = default or {}
    return vol.Schema(
        {
            vol.Required(
                const.CONF_BABY_NAME,
                default=default.get(const.CONF_BABY_NAME, const.DEFAULT_BABY_NAME),
            ): selector.TextSelector(),
            vol.Required(
                const.CONF_DAILY_WATER_GOAL_ML,
                default=default.get(
                    const.CONF_DAILY_WATER_GOAL_ML, const.DEFAULT_DAILY_WATER_GOAL_ML
                ),
            ): _water_goal_selector(),
        }
    )


def build_general_options_schema(default: dict[str, Any] | None = None) -> vol.Schema:
    """Build schema for general options: water goal, update interval, windows."""
    default = default or {}
    fields: dict[Any, Any] = {
        vol.Required(
            const.CONF_DAILY_WATER_GOAL_ML,
            default=default.get(
                const.CONF_DAILY_WATER_GOAL_ML, const.DEFAULT_DAILY_WATER_GOAL_ML
            ),
        ): _water_goal_selector(),
        vol.Required(
            const.CONF_UPDATE_INTERVAL,
            default=default.get(
                const.CONF_UPDATE_INTERVAL, const.DEFAULT_UPDATE_INTERVAL
            ),
        ): _number_selector(1),
    }
    for option_key, (default_window, max_window) in _WINDOW_LIMITS.items():
        fields[
            vol.Required(option_key, default=default.get(option_key, default_window))
        ] = _number_selector(1, max_window)

    return vol.Schema(fields)


def validate_water_goal(user_input: dict[str, Any]) -> dict[str, str]:
    """Return form errors for the water goal (empty dict = valid)."""
    errors: dict[str, str] = {}
    try:
        goal = float(user_input.get(const.CONF_DAILY_WATER_GOAL_ML, 0))
    except (TypeError, ValueError):
        goal = 0
    if goal <= 0:
        errors[const.CONF_DAILY_WATER_GOAL_ML] = (
            const.TRANS_KEY_ERROR_INVALID_WATER_GOAL
        )
    return errors


def build_options_data(user_input: dict[str, Any]) -> dict[str, Any]:
    """Normalize option values (NumberSelector returns floats) to ints."""
    keys = [
        const.CONF_DAILY_WATER_GOAL_ML,
        const.CONF_UPDATE_INTERVAL,
        *_WINDOW_LIMITS,
    ]
    return {key: int(user_input[key]) for key in keys if key in user_input}
