# File: config_flow.py
"""Config flow for the BabyCare integration.

One entry per Home Assistant instance: the baby's profile. Records live in
storage, not in the config entry.
"""

from typing import Any, Optional

from homeassistant import config_entries
from homeassistant.core import callback

from . import const
from . import flow_helpers as fh
from .options_flow import BabyCareOptionsFlowHandler


class BabyCareConfigFlow(config_entries.ConfigFlow, domain=const.DOMAIN):
    """Config Flow for BabyCare."""

    VERSION = 1

    async def async_step_user(self, user_input: Optional[dict[str, Any]] = None):
        """Ask for the baby's name and the daily water goal."""
        if any(self._async_current_entries()):
            return self.async_abort(reason=const.TRANS_KEY_ERROR_SINGLE_INSTANCE)

        errors: dict[str, str] = {}
        if user_input is not None:
            errors = fh.validate_water_goal(user_input)
            if not errors:
                baby_name = user_input[const.CONF_BABY_NAME].strip()
                entry_data = {
                    const.CONF_BABY_NAME: baby_name or const.DEFAULT_BABY_NAME,
                    const.CONF_DAILY_WATER_GOAL_ML: int(
                        user_input[const.CONF_DAILY_WATER_GOAL_ML]
                    ),
                }
                const.LOGGER.debug(
                    "DEBUG: Creating config entry with profile: %s", entry_data
                )
                return self.async_create_entry(
                    title=f"{const.BABYCARE_TITLE} ({entry_data[const.CONF_BABY_NAME]})",
                    data=entry_data,
                    options={},
                )

        return self.async_show_form(
            step_id=const.CONFIG_FLOW_STEP_USER,
            data_schema=fh.build_profile_schema(user_input),
            errors=errors,
        )

    @staticmethod
    @callback
    def async_get_options_flow(config_entry):
        """Return the Options Flow."""
        return BabyCareOptionsFlowHandler(config_entry)
