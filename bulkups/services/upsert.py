"""
Bulk upsert entry points.

Chunks run one after another on the given connection. A failing chunk stops
the batch, chunks already executed stay unless the caller's transaction rolls
them back (see bulk_upsert_atomic).
"""
import logging

from sqlalchemy.exc import SQLAlchemyError

from bulkups.config import DEFAULT_CHUNK_SIZE
from bulkups.errors import ExecutionError
from bulkups.metadata.sqlalchemy_provider import SQLAlchemyMetadata
from bulkups.services.chunker import split
from bulkups.services.columns import resolve
from bulkups.services.statement import build, check_shape

logger = logging.getLogger(__name__)


def bulk_upsert(connection, records, chunk_size: int = DEFAULT_CHUNK_SIZE, exclude_columns=(), provider=None) -> int:
    """
    Upserts records of one type with one INSERT ... ON DUPLICATE KEY UPDATE per chunk.
    Records are mapped SQLAlchemy instances unless another metadata provider is given.
    Fields named in exclude_columns are neither inserted nor updated.
    Returns the number of records sent to the database.
    """
    provider = provider or SQLAlchemyMetadata()
    if isinstance(exclude_columns, str):
        exclude_columns = (exclude_columns,)
    exclude_columns = frozenset(exclude_columns)

    chunks = split(records, chunk_size)
    if not chunks:
        logger.debug("No records to upsert.")
        return 0

    # the column set is fixed for the whole batch by its first record
    sample = chunks[0][0]
    check_shape(sample, provider)
    columns, conflict = resolve(sample, exclude_columns, provider)

    total = 0
    for number, chunk in enumerate(chunks, start=1):
        statement = build(chunk, exclude_columns, columns, conflict, provider, type(sample))
        execute(connection, statement)
        total += len(chunk)
        logger.debug(
            "Upserted chunk %d/%d (%d records) into %s, %d so far",
            number, len(chunks), len(chunk), statement.table, total,
        )

    logger.info("Upserted %d records in %d statements.", total, len(chunks))
    return total


def execute(connection, statement):
    try:
        return connection.execute(statement.to_text(), statement.params())
    except SQLAlchemyError as e:
        logger.error("Error upserting %d records into %s: %s", len(statement.rows), statement.table, e)
        raise ExecutionError(
            f"upsert into {statement.table} failed: {e}", statement=statement, orig=e
        ) from e


def bulk_upsert_atomic(engine, records, chunk_size: int = DEFAULT_CHUNK_SIZE, exclude_columns=(), provider=None) -> int:
    """
    Same as bulk_upsert inside one transaction, any failure rolls back every chunk.
    """
    with engine.begin() as conn:
        return bulk_upsert(conn, records, chunk_size, exclude_columns, provider)
