from bulkups.errors import (
    BulkUpsertError,
    ExecutionError,
    InconsistentShapeError,
    ShapeError,
)
from bulkups.metadata.dataclass_provider import DataclassMetadata
from bulkups.metadata.fields import FieldDescriptor, MetadataProvider
from bulkups.metadata.sqlalchemy_provider import SQLAlchemyMetadata
from bulkups.services.statement import Statement
from bulkups.services.upsert import bulk_upsert, bulk_upsert_atomic

__all__ = [
    "bulk_upsert",
    "bulk_upsert_atomic",
    "Statement",
    "FieldDescriptor",
    "MetadataProvider",
    "SQLAlchemyMetadata",
    "DataclassMetadata",
    "BulkUpsertError",
    "ShapeError",
    "InconsistentShapeError",
    "ExecutionError",
]
