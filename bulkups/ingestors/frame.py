"""
Upserting pandas DataFrames through a mapped model.
"""
import logging

import pandas as pd
from sqlalchemy import inspect

from bulkups.config import DEFAULT_CHUNK_SIZE
from bulkups.services.upsert import bulk_upsert

logger = logging.getLogger(__name__)


def records_from_frame(model, df: pd.DataFrame) -> list:
    """
    Builds one `model` instance per row. NaN/NA become None, columns the model
    does not map are dropped.
    """
    attrs = set(inspect(model).column_attrs.keys())
    known = [column for column in df.columns if column in attrs]
    dropped = [column for column in df.columns if column not in attrs]
    if dropped:
        logger.warning("Dropping columns not mapped on %s: %s", model.__name__, dropped)

    df = df[known].astype(object)
    df = df.where(pd.notna(df), None)
    return [model(**row) for row in df.to_dict(orient="records")]


def upsert_frame(connection, model, df: pd.DataFrame, chunk_size: int = DEFAULT_CHUNK_SIZE, exclude_columns=()) -> int:
    records = records_from_frame(model, df)
    logger.info("Upserting %d %s rows in chunks of %d...", len(records), model.__name__, chunk_size)
    return bulk_upsert(connection, records, chunk_size, exclude_columns)
