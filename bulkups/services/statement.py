"""
Builds one multi-row INSERT ... ON DUPLICATE KEY UPDATE statement per chunk.
"""
from dataclasses import dataclass
from typing import Optional, Tuple

from sqlalchemy import text

from bulkups.errors import InconsistentShapeError, ShapeError
from bulkups.services.attributes import extract_attributes
from bulkups.services.sql import quote_identifier, quote_table


@dataclass(frozen=True)
class Statement:
    table: str
    columns: Tuple[str, ...]
    rows: Tuple[tuple, ...]
    conflict: Tuple[str, ...] = ()

    def render(self, placeholder) -> str:
        """Renders the SQL text, `placeholder(i)` gives the marker of the i-th value."""
        width = len(self.columns)
        groups = []
        for r in range(len(self.rows)):
            marks = ", ".join(placeholder(r * width + c) for c in range(width))
            groups.append(f"({marks})")

        sql = "INSERT INTO {} ({}) VALUES {}".format(
            quote_table(self.table),
            ", ".join(quote_identifier(column) for column in self.columns),
            ", ".join(groups),
        )
        if self.conflict:
            sql += " ON DUPLICATE KEY UPDATE " + ", ".join(self.conflict)
        return sql

    @property
    def sql(self) -> str:
        return self.render(lambda i: "?")

    @property
    def values(self) -> tuple:
        """Bound values in placeholder order, record-major then column-minor."""
        return tuple(value for row in self.rows for value in row)

    def to_text(self):
        return text(self.render(lambda i: f":p{i}"))

    def params(self) -> dict:
        return {f"p{i}": value for i, value in enumerate(self.values)}


def check_shape(record, provider, expected_type=None):
    if not provider.is_record(record):
        raise ShapeError(f"value must be a structured record, got {type(record).__name__}")
    if expected_type is not None and type(record) is not expected_type:
        raise ShapeError(
            f"all records must be {expected_type.__name__}, got {type(record).__name__}"
        )


def build(chunk, exclude_columns, columns, conflict, provider, expected_type=None) -> Optional[Statement]:
    """
    Extracts every record's attributes and assembles the statement.
    Returns None for an empty chunk.
    """
    if not chunk:
        return None

    expected_type = expected_type or type(chunk[0])
    for record in chunk:
        check_shape(record, provider, expected_type)

    exclude_columns = frozenset(exclude_columns)
    columns = tuple(columns)
    expected = set(columns)

    rows = []
    for index, record in enumerate(chunk):
        attrs = extract_attributes(record, exclude_columns, provider)

        # If attribute sets differ, the statement loses consistency
        if len(attrs) != len(columns) or attrs.keys() != expected:
            raise InconsistentShapeError(columns, sorted(attrs), index)

        rows.append(tuple(attrs[column] for column in columns))

    return Statement(
        table=provider.table_name(chunk[0]),
        columns=columns,
        rows=tuple(rows),
        conflict=tuple(conflict),
    )
