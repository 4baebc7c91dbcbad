"""
Per-record attribute extraction.

The attribute map of a record holds every value candidate keyed by database
column name. Primary and unique keys are included, their current value is
what the database matches conflicts on.
"""
from datetime import datetime

import pytz

from bulkups.config import TIMESTAMP_FIELDS, TIMESTAMP_TIMEZONE


def current_time() -> datetime:
    return datetime.now(pytz.timezone(TIMESTAMP_TIMEZONE))


def extract_attributes(record, exclude_columns, provider) -> dict:
    attrs = {}

    for field in provider.fields(record):
        if field.name in exclude_columns or not field.is_value_candidate:
            continue

        if field.name in TIMESTAMP_FIELDS:
            attrs[field.db_name] = current_time()
        elif field.has_default_value and field.is_blank:
            # blank field with a declared default gets the default
            attrs[field.db_name] = field.default if field.default is not None else field.value
        else:
            attrs[field.db_name] = field.value

    return attrs
