# File: const.py
"""Constants for the BabyCare integration.

This file centralizes configuration keys, defaults, storage keys, record
fields, period identifiers, service names and platform identifiers for
consistency across the integration.
"""

import logging

import homeassistant.util.dt as dt_util
from homeassistant.const import Platform

from .utils import dt_utils


def set_default_timezone(hass):
    """Set the default timezone based on the Home Assistant configuration."""
    global DEFAULT_TIME_ZONE
    DEFAULT_TIME_ZONE = dt_util.get_time_zone(hass.config.time_zone)
    if DEFAULT_TIME_ZONE is not None:
        dt_utils.set_default_timezone(DEFAULT_TIME_ZONE)


# ------------------------------------------------------------------------------------------------
# General / Integration Information
# ------------------------------------------------------------------------------------------------
# Integration Name
BABYCARE_TITLE = "BabyCare"

# Integration Domain
DOMAIN = "babycare"

# Logger
LOGGER = logging.getLogger(__package__)

# Supported Platforms
PLATFORMS = [
    Platform.SENSOR,
]

# Coordinator
COORDINATOR = "coordinator"
COORDINATOR_SUFFIX = "_coordinator"

# Storage and Versioning
STORAGE_MANAGER = "storage_manager"
STORAGE_KEY = "babycare_data"
STORAGE_VERSION = 1
SCHEMA_VERSION_CURRENT = 1

# Default timezone: initially None, to be set once hass is available.
DEFAULT_TIME_ZONE = None

# Update Interval (minutes)
DEFAULT_UPDATE_INTERVAL = 5

# ------------------------------------------------------------------------------------------------
# Configuration Keys
# ------------------------------------------------------------------------------------------------
CONF_BABY_NAME = "baby_name"
CONF_DAILY_WATER_GOAL_ML = "daily_water_goal_ml"
CONF_UPDATE_INTERVAL = "update_interval"
CONF_DAILY_WINDOW = "daily_window"
CONF_WEEKLY_WINDOW = "weekly_window"
CONF_MONTHLY_WINDOW = "monthly_window"
CONF_YEARLY_WINDOW = "yearly_window"

# ConfigFlow / OptionsFlow Steps
CONFIG_FLOW_STEP_USER = "user"
OPTIONS_FLOW_STEP_INIT = "init"

# ------------------------------------------------------------------------------------------------
# Defaults
# ------------------------------------------------------------------------------------------------
DEFAULT_BABY_NAME = "Baby"
DEFAULT_DAILY_WATER_GOAL_ML = 800
DEFAULT_DAILY_WINDOW = 7
DEFAULT_WEEKLY_WINDOW = 8
DEFAULT_MONTHLY_WINDOW = 12
DEFAULT_YEARLY_WINDOW = 3
DEFAULT_SAMPLE_MONTHS = 3
DEFAULT_ZERO = 0
DEFAULT_NOTES = (
    "Doctor visits, vaccinations, allergies and anything else worth "
    "remembering about the baby."
)
NOTES_PREVIEW_LENGTH = 64

# Meal frequency look-back (days)
MEAL_FREQUENCY_DAYS = 7

# Sample data generation
SAMPLE_RECORDS_PER_MONTH_MIN = 25
SAMPLE_RECORDS_PER_MONTH_MAX = 30
SAMPLE_SLEEP_HOUR_MIN = 20
SAMPLE_SLEEP_HOUR_MAX = 23
SAMPLE_SLEEP_DURATION_HOURS_MIN = 7.0
SAMPLE_SLEEP_DURATION_HOURS_MAX = 11.5

# Float precision for rounding
DATA_FLOAT_PRECISION = 2

SECONDS_PER_HOUR = 3600

# ------------------------------------------------------------------------------------------------
# Storage Data Keys
# ------------------------------------------------------------------------------------------------
DATA_META = "meta"
DATA_META_SCHEMA_VERSION = "schema_version"
DATA_META_CREATED = "created"
DATA_SLEEP_RECORDS = "sleep_records"
DATA_MEAL_RECORDS = "meal_records"
DATA_MILESTONES = "milestones"
DATA_NOTES = "notes"

# Shared record fields
DATA_RECORD_ID = "id"

# Sleep record fields
DATA_SLEEP_TIME = "sleep_time"
DATA_WAKE_TIME = "wake_time"

# Meal record fields
DATA_MEAL_DATE = "date"
DATA_MEAL_TYPE = "meal_type"
DATA_MEAL_FOOD_ITEMS = "food_items"
DATA_MEAL_AMOUNT = "amount"
DATA_MEAL_NOTES = "notes"
DATA_MEAL_WATER_AMOUNT_ML = "water_amount_ml"

# Milestone fields
DATA_MILESTONE_DATE = "date"
DATA_MILESTONE_TITLE = "title"
DATA_MILESTONE_DESCRIPTION = "description"
DATA_MILESTONE_CATEGORY = "category"

# ------------------------------------------------------------------------------------------------
# Record Types
# ------------------------------------------------------------------------------------------------
RECORD_TYPE_SLEEP = "sleep"
RECORD_TYPE_MEAL = "meal"
RECORD_TYPE_WATER = "water"
RECORD_TYPE_MILESTONE = "milestone"
RECORD_TYPE_ALL = "all"

RECORD_TYPES = [
    RECORD_TYPE_SLEEP,
    RECORD_TYPE_MEAL,
    RECORD_TYPE_WATER,
    RECORD_TYPE_MILESTONE,
]

CLEARABLE_RECORD_TYPES = [
    RECORD_TYPE_SLEEP,
    RECORD_TYPE_MEAL,
    RECORD_TYPE_MILESTONE,
    RECORD_TYPE_ALL,
]

# Meal types
MEAL_TYPE_BREAKFAST = "breakfast"
MEAL_TYPE_LUNCH = "lunch"
MEAL_TYPE_DINNER = "dinner"
MEAL_TYPE_SNACK = "snack"
MEAL_TYPE_MILK = "milk"

MEAL_TYPES = [
    MEAL_TYPE_BREAKFAST,
    MEAL_TYPE_LUNCH,
    MEAL_TYPE_DINNER,
    MEAL_TYPE_SNACK,
    MEAL_TYPE_MILK,
]

# Milestone categories
MILESTONE_CATEGORY_FIRST_SMILE = "first_smile"
MILESTONE_CATEGORY_FIRST_ROLL = "first_roll"
MILESTONE_CATEGORY_FIRST_SIT = "first_sit"
MILESTONE_CATEGORY_FIRST_CRAWL = "first_crawl"
MILESTONE_CATEGORY_FIRST_STAND = "first_stand"
MILESTONE_CATEGORY_FIRST_WALK = "first_walk"
MILESTONE_CATEGORY_FIRST_WORD = "first_word"
MILESTONE_CATEGORY_FIRST_TOOTH = "first_tooth"
MILESTONE_CATEGORY_FIRST_SOLID = "first_solid"
MILESTONE_CATEGORY_SLEEP = "sleep"
MILESTONE_CATEGORY_HEALTH = "health"
MILESTONE_CATEGORY_OTHER = "other"

MILESTONE_CATEGORIES = [
    MILESTONE_CATEGORY_FIRST_SMILE,
    MILESTONE_CATEGORY_FIRST_ROLL,
    MILESTONE_CATEGORY_FIRST_SIT,
    MILESTONE_CATEGORY_FIRST_CRAWL,
    MILESTONE_CATEGORY_FIRST_STAND,
    MILESTONE_CATEGORY_FIRST_WALK,
    MILESTONE_CATEGORY_FIRST_WORD,
    MILESTONE_CATEGORY_FIRST_TOOTH,
    MILESTONE_CATEGORY_FIRST_SOLID,
    MILESTONE_CATEGORY_SLEEP,
    MILESTONE_CATEGORY_HEALTH,
    MILESTONE_CATEGORY_OTHER,
]

# ------------------------------------------------------------------------------------------------
# Periods
# ------------------------------------------------------------------------------------------------
PERIOD_DAILY = "daily"
PERIOD_WEEKLY = "weekly"
PERIOD_MONTHLY = "monthly"
PERIOD_YEARLY = "yearly"

PERIODS = [
    PERIOD_DAILY,
    PERIOD_WEEKLY,
    PERIOD_MONTHLY,
    PERIOD_YEARLY,
]

# Period -> (options key, default window)
PERIOD_WINDOW_OPTIONS = {
    PERIOD_DAILY: (CONF_DAILY_WINDOW, DEFAULT_DAILY_WINDOW),
    PERIOD_WEEKLY: (CONF_WEEKLY_WINDOW, DEFAULT_WEEKLY_WINDOW),
    PERIOD_MONTHLY: (CONF_MONTHLY_WINDOW, DEFAULT_MONTHLY_WINDOW),
    PERIOD_YEARLY: (CONF_YEARLY_WINDOW, DEFAULT_YEARLY_WINDOW),
}

# Statistics cache kinds
STATS_KIND_PERIODS = "periods"
STATS_KIND_RANGE = "range"
STATS_KIND_CHART = "chart"
STATS_KIND_DISTRIBUTION = "distribution"

# ------------------------------------------------------------------------------------------------
# Event Signals (manager communication)
# ------------------------------------------------------------------------------------------------
SIGNAL_SUFFIX_RECORDS_CHANGED = "records_changed"

# Mutation actions carried in the records_changed payload
RECORD_ACTION_INSERT = "insert"
RECORD_ACTION_UPDATE = "update"
RECORD_ACTION_DELETE = "delete"
RECORD_ACTION_RELOAD = "reload"
RECORD_ACTION_CLEAR = "clear"

# ------------------------------------------------------------------------------------------------
# Services
# ------------------------------------------------------------------------------------------------
SERVICE_START_SLEEP = "start_sleep"
SERVICE_END_SLEEP = "end_sleep"
SERVICE_ADD_SLEEP_RECORD = "add_sleep_record"
SERVICE_UPDATE_SLEEP_RECORD = "update_sleep_record"
SERVICE_DELETE_SLEEP_RECORD = "delete_sleep_record"
SERVICE_ADD_MEAL = "add_meal"
SERVICE_UPDATE_MEAL = "update_meal"
SERVICE_DELETE_MEAL = "delete_meal"
SERVICE_ADD_MILESTONE = "add_milestone"
SERVICE_UPDATE_MILESTONE = "update_milestone"
SERVICE_DELETE_MILESTONE = "delete_milestone"
SERVICE_SET_NOTES = "set_notes"
SERVICE_GENERATE_SAMPLE_DATA = "generate_sample_data"
SERVICE_CLEAR_ALL_DATA = "clear_all_data"
SERVICE_GET_STATISTICS = "get_statistics"

# Service fields
FIELD_RECORD_ID = "record_id"
FIELD_MINUTES_AGO = "minutes_ago"
FIELD_SLEEP_TIME = "sleep_time"
FIELD_WAKE_TIME = "wake_time"
FIELD_DATE = "date"
FIELD_MEAL_TYPE = "meal_type"
FIELD_FOOD_ITEMS = "food_items"
FIELD_AMOUNT = "amount"
FIELD_NOTES = "notes"
FIELD_WATER_AMOUNT_ML = "water_amount_ml"
FIELD_TITLE = "title"
FIELD_DESCRIPTION = "description"
FIELD_CATEGORY = "category"
FIELD_MONTHS = "months"
FIELD_RECORD_TYPE = "record_type"
FIELD_PERIOD = "period"
FIELD_WINDOW_SIZE = "window_size"
FIELD_ANCHOR = "anchor"

# Service response keys
RESPONSE_SUMMARIES = "summaries"
RESPONSE_CHART = "chart"

# ------------------------------------------------------------------------------------------------
# Sensors
# ------------------------------------------------------------------------------------------------
SENSOR_UID_SUFFIX_SLEEP_TODAY = "_sleep_today"
SENSOR_UID_SUFFIX_SLEEP_STATUS = "_sleep_status"
SENSOR_UID_SUFFIX_SLEEP_PERIOD = "_sleep_{period}"
SENSOR_UID_SUFFIX_MEALS_TODAY = "_meals_today"
SENSOR_UID_SUFFIX_WATER_TODAY = "_water_today"
SENSOR_UID_SUFFIX_MILESTONES = "_milestones"
SENSOR_UID_SUFFIX_NOTES = "_notes"

SLEEP_STATE_SLEEPING = "sleeping"
SLEEP_STATE_AWAKE = "awake"

# Sensor attributes
ATTR_AVERAGE_HOURS = "average_hours"
ATTR_CATEGORY_DISTRIBUTION = "category_distribution"
ATTR_CHART = "chart"
ATTR_COMPLETED_RECORDS = "completed_records"
ATTR_COUNT = "count"
ATTR_DAILY_AVERAGE_HOURS = "daily_average_hours"
ATTR_DAILY_COUNTS = "daily_counts"
ATTR_DIFFERENCE_HOURS = "difference_hours"
ATTR_ELAPSED_MINUTES = "elapsed_minutes"
ATTR_FORMATTED_DURATION = "formatted_duration"
ATTR_GOAL_ML = "goal_ml"
ATTR_LATEST_DATE = "latest_date"
ATTR_LATEST_TITLE = "latest_title"
ATTR_MEAL_TYPE_DISTRIBUTION = "meal_type_distribution"
ATTR_NOTES = "notes"
ATTR_PERIOD_END = "period_end"
ATTR_PERIOD_START = "period_start"
ATTR_PROGRESS = "progress"
ATTR_SLEEP_START = "sleep_start"
ATTR_TOP_MEAL_TYPE = "top_meal_type"
ATTR_WEEKLY_AVERAGE = "weekly_average"
ATTR_WINDOW_SIZE = "window_size"
ATTR_YESTERDAY_HOURS = "yesterday_hours"

# ------------------------------------------------------------------------------------------------
# Translation Keys
# ------------------------------------------------------------------------------------------------
TRANS_KEY_SENSOR_SLEEP_TODAY = "sleep_today"
TRANS_KEY_SENSOR_SLEEP_STATUS = "sleep_status"
TRANS_KEY_SENSOR_SLEEP_PERIOD = "sleep_{period}"
TRANS_KEY_SENSOR_MEALS_TODAY = "meals_today"
TRANS_KEY_SENSOR_WATER_TODAY = "water_today"
TRANS_KEY_SENSOR_MILESTONES = "milestones"
TRANS_KEY_SENSOR_NOTES = "notes"

TRANS_KEY_ERROR_SINGLE_INSTANCE = "single_instance_allowed"
TRANS_KEY_ERROR_INVALID_WATER_GOAL = "invalid_water_goal"
TRANS_KEY_ERROR_NO_ENTRY = "no_entry"
TRANS_KEY_ERROR_RECORD_NOT_FOUND = "record_not_found"
TRANS_KEY_ERROR_SLEEP_IN_PROGRESS = "sleep_in_progress"
TRANS_KEY_ERROR_NO_SLEEP_IN_PROGRESS = "no_sleep_in_progress"
TRANS_KEY_ERROR_WAKE_BEFORE_SLEEP = "wake_before_sleep"

# ------------------------------------------------------------------------------------------------
# Log / Error Messages
# ------------------------------------------------------------------------------------------------
MSG_NO_ENTRY_FOUND = "No BabyCare entry found"
ERROR_RECORD_NOT_FOUND_FMT = "{} record '{}' not found"
ERROR_SLEEP_IN_PROGRESS = "A sleep session is already in progress"
ERROR_NO_SLEEP_IN_PROGRESS = "No sleep session is in progress"
ERROR_WAKE_BEFORE_SLEEP = "Wake time must be after sleep time"
