"""Static constants for the weight tracker CLI."""

from __future__ import annotations

from datetime import timedelta

DT_FORMAT_LONG = "%m/%d/%Y-%H:%M:%S"
DT_FORMAT_SHORT = "%m/%d %H:%M"

DT_FORMAT_LONG_HUMAN = "MM/DD/YYYY-HH:MM:SS"
DT_FORMAT_SHORT_HUMAN = "MM/DD HH:MM"

DEFAULT_TABLE_NAME = "weight-tracker"
KEY_FIELD = "timestamp"

# DynamoDB attribute-value type tags.
STRING_TAG = "S"
NUMBER_TAG = "N"

ROLLING_HALF_WINDOW = timedelta(hours=12)

DEFAULT_LIST_DAYS = 2
DEFAULT_PLOT_WEEKS = 1
DEFAULT_TARGETS = [80]
DEFAULT_PLOT_WIDTH = 128
DEFAULT_PLOT_HEIGHT = 32

AWS_CONFIG_KEYS = ("access_key_id", "secret_access_key", "default_region")

# Largest counts that still fit in a timedelta.
MAX_LOOKBACK_DAYS = 999_999_999
MAX_LOOKBACK_WEEKS = MAX_LOOKBACK_DAYS // 7
