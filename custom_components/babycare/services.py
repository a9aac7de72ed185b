# File: services.py
"""Defines custom services for the BabyCare integration.

These services record sleep sessions, meals and milestones from scripts,
automations or dashboard buttons, and expose the period statistics as a
service response.
"""

from __future__ import annotations

import voluptuous as vol
from homeassistant.core import (
    HomeAssistant,
    ServiceCall,
    ServiceResponse,
    SupportsResponse,
)
from homeassistant.helpers import config_validation as cv

from . import const
from .helpers.entity_helpers import get_coordinator

# --- Service Schemas ---
MINUTES_AGO_SCHEMA = vol.Schema(
    {
        vol.Optional(const.FIELD_MINUTES_AGO, default=0): vol.All(
            vol.Coerce(int), vol.Range(min=0)
        ),
    }
)

ADD_SLEEP_RECORD_SCHEMA = vol.Schema(
    {
        vol.Required(const.FIELD_SLEEP_TIME): cv.datetime,
        vol.Optional(const.FIELD_WAKE_TIME): vol.Any(cv.datetime, None),
    }
)

UPDATE_SLEEP_RECORD_SCHEMA = vol.Schema(
    {
        vol.Required(const.FIELD_RECORD_ID): cv.string,
        vol.Optional(const.FIELD_SLEEP_TIME): cv.datetime,
        vol.Optional(const.FIELD_WAKE_TIME): cv.datetime,
    }
)

RECORD_ID_SCHEMA = vol.Schema(
    {
        vol.Required(const.FIELD_RECORD_ID): cv.string,
    }
)

_MEAL_FIELDS = {
    vol.Optional(const.FIELD_DATE): cv.datetime,
    vol.Optional(const.FIELD_FOOD_ITEMS): vol.All(cv.ensure_list, [cv.string]),
    vol.Optional(const.FIELD_AMOUNT): cv.string,
    vol.Optional(const.FIELD_NOTES): cv.string,
    vol.Optional(const.FIELD_WATER_AMOUNT_ML): vol.All(
        vol.Coerce(int), vol.Range(min=0)
    ),
}

ADD_MEAL_SCHEMA = vol.Schema(
    {
        vol.Required(const.FIELD_MEAL_TYPE): vol.In(const.MEAL_TYPES),
        **_MEAL_FIELDS,
    }
)

UPDATE_MEAL_SCHEMA = vol.Schema(
    {
        vol.Required(const.FIELD_RECORD_ID): cv.string,
        vol.Optional(const.FIELD_MEAL_TYPE): vol.In(const.MEAL_TYPES),
        **_MEAL_FIELDS,
    }
)

ADD_MILESTONE_SCHEMA = vol.Schema(
    {
        vol.Required(const.FIELD_TITLE): cv.string,
        vol.Optional(
            const.FIELD_CATEGORY, default=const.MILESTONE_CATEGORY_OTHER
        ): vol.In(const.MILESTONE_CATEGORIES),
        vol.Optional(const.FIELD_DATE): cv.datetime,
        vol.Optional(const.FIELD_DESCRIPTION, default=""): cv.string,
    }
)

UPDATE_MILESTONE_SCHEMA = vol.Schema(
    {
        vol.Required(const.FIELD_RECORD_ID): cv.string,
        vol.Optional(const.FIELD_TITLE): cv.string,
        vol.Optional(const.FIELD_CATEGORY): vol.In(const.MILESTONE_CATEGORIES),
        vol.Optional(const.FIELD_DATE): cv.datetime,
        vol.Optional(const.FIELD_DESCRIPTION): cv.string,
    }
)

SET_NOTES_SCHEMA = vol.Schema(
    {
        vol.Required(const.FIELD_NOTES): cv.string,
    }
)

GENERATE_SAMPLE_DATA_SCHEMA = vol.Schema(
    {
        vol.Optional(const.FIELD_MONTHS, default=const.DEFAULT_SAMPLE_MONTHS): vol.All(
            vol.Coerce(int), vol.Range(min=1, max=24)
        ),
    }
)

CLEAR_ALL_DATA_SCHEMA = vol.Schema(
    {
        vol.Optional(const.FIELD_RECORD_TYPE, default=const.RECORD_TYPE_ALL): vol.In(
            const.CLEARABLE_RECORD_TYPES
        ),
    }
)

GET_STATISTICS_SCHEMA = vol.Schema(
    {
        vol.Optional(const.FIELD_RECORD_TYPE, default=const.RECORD_TYPE_SLEEP): vol.In(
            const.RECORD_TYPES
        ),
        vol.Optional(const.FIELD_PERIOD, default=const.PERIOD_DAILY): vol.In(
            const.PERIODS
        ),
        vol.Optional(const.FIELD_WINDOW_SIZE): vol.All(
            vol.Coerce(int), vol.Range(min=1)
        ),
        vol.Optional(const.FIELD_ANCHOR): cv.date,
    }
)

_SERVICES = [
    const.SERVICE_START_SLEEP,
    const.SERVICE_END_SLEEP,
    const.SERVICE_ADD_SLEEP_RECORD,
    const.SERVICE_UPDATE_SLEEP_RECORD,
    const.SERVICE_DELETE_SLEEP_RECORD,
    const.SERVICE_ADD_MEAL,
    const.SERVICE_UPDATE_MEAL,
    const.SERVICE_DELETE_MEAL,
    const.SERVICE_ADD_MILESTONE,
    const.SERVICE_UPDATE_MILESTONE,
    const.SERVICE_DELETE_MILESTONE,
    const.SERVICE_SET_NOTES,
    const.SERVICE_GENERATE_SAMPLE_DATA,
    const.SERVICE_CLEAR_ALL_DATA,
    const.SERVICE_GET_STATISTICS,
]


def async_setup_services(hass: HomeAssistant):
    """Register BabyCare services."""

    # --- Sleep ---

    async def handle_start_sleep(call: ServiceCall):
        """Handle starting a sleep session."""
        coordinator = get_coordinator(hass)
        coordinator.sleep_manager.start_sleep(call.data[const.FIELD_MINUTES_AGO])

    async def handle_end_sleep(call: ServiceCall):
        """Handle ending the sleep session in progress."""
        coordinator = get_coordinator(hass)
        coordinator.sleep_manager.end_sleep(call.data[const.FIELD_MINUTES_AGO])

    async def handle_add_sleep_record(call: ServiceCall):
        """Handle adding a sleep session with explicit times."""
        coordinator = get_coordinator(hass)
        record = coordinator.sleep_manager.add_record(
            call.data[const.FIELD_SLEEP_TIME], call.data.get(const.FIELD_WAKE_TIME)
        )
        const.LOGGER.info(
            "INFO: Added sleep record %s", record[const.DATA_RECORD_ID]
        )

    async def handle_update_sleep_record(call: ServiceCall):
        """Handle changing the times of a sleep session."""
        coordinator = get_coordinator(hass)
        coordinator.sleep_manager.update_record(
            call.data[const.FIELD_RECORD_ID],
            sleep_time=call.data.get(const.FIELD_SLEEP_TIME),
            wake_time=call.data.get(const.FIELD_WAKE_TIME),
        )

    async def handle_delete_sleep_record(call: ServiceCall):
        """Handle deleting a sleep session."""
        coordinator = get_coordinator(hass)
        coordinator.sleep_manager.delete_record(call.data[const.FIELD_RECORD_ID])

    # --- Meals ---

    async def handle_add_meal(call: ServiceCall):
        """Handle recording a meal."""
        coordinator = get_coordinator(hass)
        record = coordinator.meal_manager.add_meal(
            call.data[const.FIELD_MEAL_TYPE],
            when=call.data.get(const.FIELD_DATE),
            food_items=call.data.get(const.FIELD_FOOD_ITEMS),
            amount=call.data.get(const.FIELD_AMOUNT, ""),
            notes=call.data.get(const.FIELD_NOTES, ""),
            water_amount_ml=call.data.get(const.FIELD_WATER_AMOUNT_ML),
        )
        const.LOGGER.info(
            "INFO: Added %s meal %s",
            record[const.DATA_MEAL_TYPE],
            record[const.DATA_RECORD_ID],
        )

    async def handle_update_meal(call: ServiceCall):
        """Handle changing fields of a meal."""
        coordinator = get_coordinator(hass)
        fields = dict(call.data)
        record_id = fields.pop(const.FIELD_RECORD_ID)
        when = fields.pop(const.FIELD_DATE, None)
        coordinator.meal_manager.update_meal(record_id, when=when, **fields)

    async def handle_delete_meal(call: ServiceCall):
        """Handle deleting a meal."""
        coordinator = get_coordinator(hass)
        coordinator.meal_manager.delete_record(call.data[const.FIELD_RECORD_ID])

    # --- Milestones ---

    async def handle_add_milestone(call: ServiceCall):
        """Handle recording a milestone."""
        coordinator = get_coordinator(hass)
        coordinator.milestone_manager.add_milestone(
            call.data[const.FIELD_TITLE],
            category=call.data[const.FIELD_CATEGORY],
            when=call.data.get(const.FIELD_DATE),
            description=call.data[const.FIELD_DESCRIPTION],
        )

    async def handle_update_milestone(call: ServiceCall):
        """Handle changing fields of a milestone."""
        coordinator = get_coordinator(hass)
        fields = dict(call.data)
        record_id = fields.pop(const.FIELD_RECORD_ID)
        when = fields.pop(const.FIELD_DATE, None)
        coordinator.milestone_manager.update_milestone(record_id, when=when, **fields)

    async def handle_delete_milestone(call: ServiceCall):
        """Handle deleting a milestone."""
        coordinator = get_coordinator(hass)
        coordinator.milestone_manager.delete_record(call.data[const.FIELD_RECORD_ID])

    # --- Notes / Maintenance ---

    async def handle_set_notes(call: ServiceCall):
        """Handle replacing the notes text."""
        coordinator = get_coordinator(hass)
        coordinator.set_notes(call.data[const.FIELD_NOTES])

    async def handle_generate_sample_data(call: ServiceCall):
        """Handle replacing sleep records with generated sample data."""
        coordinator = get_coordinator(hass)
        coordinator.sleep_manager.generate_sample_data(call.data[const.FIELD_MONTHS])

    async def handle_clear_all_data(call: ServiceCall):
        """Handle clearing records of one type, or all of them."""
        coordinator = get_coordinator(hass)
        coordinator.clear_all_data(call.data[const.FIELD_RECORD_TYPE])

    # --- Statistics ---

    async def handle_get_statistics(call: ServiceCall) -> ServiceResponse:
        """Return period summaries and the chart series."""
        coordinator = get_coordinator(hass)
        stats = coordinator.statistics_manager
        record_type = call.data[const.FIELD_RECORD_TYPE]
        period = call.data[const.FIELD_PERIOD]
        window_size = call.data.get(const.FIELD_WINDOW_SIZE)
        anchor = call.data.get(const.FIELD_ANCHOR)

        summaries = stats.get_period_statistics(record_type, period, window_size, anchor)
        chart = stats.get_chart_series(record_type, period, window_size, anchor)
        const.LOGGER.debug(
            "DEBUG: get_statistics %s/%s returned %s periods",
            record_type,
            period,
            len(summaries),
        )
        return {
            const.RESPONSE_SUMMARIES: [summary.as_dict() for summary in summaries],
            const.RESPONSE_CHART: [point.as_dict() for point in chart],
        }

    # --- Register Services ---
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_START_SLEEP,
        handle_start_sleep,
        schema=MINUTES_AGO_SCHEMA,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_END_SLEEP,
        handle_end_sleep,
        schema=MINUTES_AGO_SCHEMA,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_ADD_SLEEP_RECORD,
        handle_add_sleep_record,
        schema=ADD_SLEEP_RECORD_SCHEMA,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_UPDATE_SLEEP_RECORD,
        handle_update_sleep_record,
        schema=UPDATE_SLEEP_RECORD_SCHEMA,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_DELETE_SLEEP_RECORD,
        handle_delete_sleep_record,
        schema=RECORD_ID_SCHEMA,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_ADD_MEAL,
        handle_add_meal,
        schema=ADD_MEAL_SCHEMA,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_UPDATE_MEAL,
        handle_update_meal,
        schema=UPDATE_MEAL_SCHEMA,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_DELETE_MEAL,
        handle_delete_meal,
        schema=RECORD_ID_SCHEMA,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_ADD_MILESTONE,
        handle_add_milestone,
        schema=ADD_MILESTONE_SCHEMA,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_UPDATE_MILESTONE,
        handle_update_milestone,
        schema=UPDATE_MILESTONE_SCHEMA,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_DELETE_MILESTONE,
        handle_delete_milestone,
        schema=RECORD_ID_SCHEMA,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_SET_NOTES,
        handle_set_notes,
        schema=SET_NOTES_SCHEMA,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_GENERATE_SAMPLE_DATA,
        handle_generate_sample_data,
        schema=GENERATE_SAMPLE_DATA_SCHEMA,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_CLEAR_ALL_DATA,
        handle_clear_all_data,
        schema=CLEAR_ALL_DATA_SCHEMA,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_GET_STATISTICS,
        handle_get_statistics,
        schema=GET_STATISTICS_SCHEMA,
        supports_response=SupportsResponse.ONLY,
    )

    const.LOGGER.debug("DEBUG: Registered %s BabyCare services", len(_SERVICES))


async def async_unload_services(hass: HomeAssistant):
    """Unregister BabyCare services when unloading the integration."""
    for service in _SERVICES:
        if hass.services.has_service(const.DOMAIN, service):
            hass.services.async_remove(const.DOMAIN, service)

    const.LOGGER.info("INFO: BabyCare services have been unregistered")
