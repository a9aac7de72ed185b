# File: options_flow.py
"""Options flow for the BabyCare integration.

Edits the water goal, the coordinator update interval and the default
statistics window per period. Saving reloads the entry through the update
listener registered in `async_setup_entry`.
"""

from homeassistant import config_entries

from . import const
from . import flow_helpers as fh


class BabyCareOptionsFlowHandler(config_entries.OptionsFlow):
    """Options Flow for BabyCare general settings."""

    def __init__(self, _config_entry: config_entries.ConfigEntry):
        """Initialize the options flow."""
        self._entry_options = {}

    async def async_step_init(self, user_input=None):
        """Show and save the general options."""
        if not self._entry_options:
            # The water goal starts out in entry data (config flow)
            self._entry_options = {
                const.CONF_DAILY_WATER_GOAL_ML: self.config_entry.data.get(
                    const.CONF_DAILY_WATER_GOAL_ML, const.DEFAULT_DAILY_WATER_GOAL_ML
                ),
                **self.config_entry.options,
            }

        errors = {}
        if user_input is not None:
            errors = fh.validate_water_goal(user_input)
            if not errors:
                self._entry_options.update(fh.build_options_data(user_input))
                const.LOGGER.debug(
                    "DEBUG: General Options Updated: %s", self._entry_options
                )
                return self.async_create_entry(title="", data=self._entry_options)

        return self.async_show_form(
            step_id=const.OPTIONS_FLOW_STEP_INIT,
            data_schema=fh.build_general_options_schema(self._entry_options),
            errors=errors,
        )
