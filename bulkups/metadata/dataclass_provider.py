"""
Field metadata registered on plain dataclasses.

    @dataclass
    class Store:
        __tablename__ = "stores"

        id: int = field(default=None, metadata={"primary_key": True})
        store_id: str = field(default=None, metadata={"unique": True})
        status: str = field(default=None, metadata={"default": "pending"})
        timezone: str = field(default=None, metadata={"column": "timezone_str"})
"""
import dataclasses

from bulkups.metadata.fields import FieldDescriptor, is_blank, to_column_name


class DataclassMetadata:

    def is_record(self, obj) -> bool:
        return dataclasses.is_dataclass(obj) and not isinstance(obj, type)

    def table_name(self, record) -> str:
        cls = type(record)
        return getattr(cls, "__tablename__", None) or to_column_name(cls.__name__)

    def fields(self, record):
        descriptors = []
        for f in dataclasses.fields(record):
            meta = f.metadata
            value = getattr(record, f.name)
            descriptors.append(
                FieldDescriptor(
                    name=f.name,
                    db_name=meta.get("column") or to_column_name(f.name),
                    value=value,
                    is_primary_key=bool(meta.get("primary_key", False)),
                    is_relationship=bool(meta.get("relationship", False)),
                    has_foreign_key=bool(meta.get("foreign_key", False)),
                    is_ignored=bool(meta.get("ignore", False)),
                    is_unique=bool(meta.get("unique", False)),
                    has_default_value="default" in meta,
                    is_blank=is_blank(value),
                    default=meta.get("default"),
                )
            )
        return descriptors
