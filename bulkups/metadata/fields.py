"""
Field metadata consumed by the statement builder.

A metadata provider turns one record into an ordered list of FieldDescriptor
objects. The builder never looks at the record itself, only at the descriptors.
"""
import re
from dataclasses import dataclass
from typing import Any, Optional, Protocol, Sequence


@dataclass(frozen=True)
class FieldDescriptor:
    name: str
    db_name: str
    value: Any = None
    is_primary_key: bool = False
    is_relationship: bool = False
    has_foreign_key: bool = False
    is_ignored: bool = False
    is_unique: bool = False
    has_default_value: bool = False
    is_blank: bool = False
    # declared default literal, None when the field has none
    default: Optional[Any] = None

    @property
    def is_value_candidate(self) -> bool:
        """True when the field maps to a plain column holding the record's data."""
        return not (self.is_relationship or self.has_foreign_key or self.is_ignored)

    @property
    def is_conflict_key(self) -> bool:
        return self.is_primary_key or self.is_unique


class MetadataProvider(Protocol):
    def is_record(self, obj: Any) -> bool: ...

    def fields(self, record: Any) -> Sequence[FieldDescriptor]: ...

    def table_name(self, record: Any) -> str: ...


def is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and value == "")


_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def to_column_name(name: str) -> str:
    """StoreStatus -> store_status, HTTPCode -> http_code."""
    return _CAMEL_BOUNDARY.sub("_", name).lower()
