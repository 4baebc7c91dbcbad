"""
Field metadata read from SQLAlchemy declarative models.
"""
from functools import lru_cache

from sqlalchemy import Column, UniqueConstraint, inspect
from sqlalchemy.orm.exc import UnmappedColumnError
from sqlalchemy.orm.state import InstanceState
from sqlalchemy.sql.expression import TextClause

from bulkups.errors import ShapeError
from bulkups.metadata.fields import FieldDescriptor, is_blank


@lru_cache(maxsize=None)
def _unique_columns(table) -> frozenset:
    """Names of columns covered by unique=True, a UniqueConstraint or a unique Index."""
    names = {column.name for column in table.columns if column.unique}
    for constraint in table.constraints:
        if isinstance(constraint, UniqueConstraint):
            names.update(column.name for column in constraint.columns)
    for index in table.indexes:
        if index.unique:
            names.update(c.name for c in index.expressions if hasattr(c, "name"))
    return frozenset(names)


def _string_literal(sql):
    """'click' -> click, anything that is not a quoted string has no literal."""
    sql = sql.strip()
    if len(sql) >= 2 and sql[0] == sql[-1] == "'":
        return sql[1:-1].replace("''", "'")
    return None


def _declared_default(column):
    """
    Returns (has_default, literal). Callable, sequence and SQL expression
    defaults have no literal.
    """
    if column.default is not None:
        if getattr(column.default, "is_scalar", False):
            return True, column.default.arg
        return True, None

    if column.server_default is not None:
        arg = getattr(column.server_default, "arg", None)
        if isinstance(arg, str):
            return True, arg
        if isinstance(arg, TextClause):
            return True, _string_literal(arg.text)
        # func.now() and other SQL expressions are evaluated by the server
        return True, None

    return False, None


class SQLAlchemyMetadata:
    """
    Metadata provider for instances of mapped classes.

    Fields come in local table column order, then relationships, then any
    column properties that are not backed by a table column. Values come from
    the instance state, nothing is loaded. A persistent or detached record with
    an expired or deferred column raises ShapeError.
    """

    def is_record(self, obj) -> bool:
        return isinstance(inspect(obj, raiseerr=False), InstanceState)

    def table_name(self, record) -> str:
        return inspect(record).mapper.local_table.fullname

    def fields(self, record):
        state = inspect(record)
        mapper = state.mapper
        table = mapper.local_table
        unique = _unique_columns(table)
        # a transient or pending record has no loaded state, unset columns are None
        unloaded = state.unloaded if state.key is not None else ()

        descriptors = []
        seen = set()

        for column in table.columns:
            try:
                prop = mapper.get_property_by_column(column)
            except UnmappedColumnError:
                continue
            if prop.key in seen:
                continue
            seen.add(prop.key)

            if prop.key in unloaded:
                raise ShapeError(
                    f"{mapper.class_.__name__}.{prop.key} is expired or deferred, "
                    "refresh or load the record before upserting it"
                )
            value = state.dict.get(prop.key)
            has_default, default = _declared_default(column)
            descriptors.append(
                FieldDescriptor(
                    name=prop.key,
                    db_name=column.name,
                    value=value,
                    is_primary_key=column.primary_key,
                    is_ignored=bool(column.info.get("ignore", False)),
                    is_unique=column.name in unique,
                    has_default_value=has_default,
                    is_blank=is_blank(value),
                    default=default,
                )
            )

        for rel in mapper.relationships:
            seen.add(rel.key)
            # never touch the attribute itself, it would lazy load
            value = state.dict.get(rel.key)
            descriptors.append(
                FieldDescriptor(
                    name=rel.key,
                    db_name=rel.key,
                    value=value,
                    is_relationship=True,
                    has_foreign_key=rel.direction.name == "MANYTOONE",
                    is_blank=value is None,
                )
            )

        for prop in mapper.column_attrs:
            if prop.key in seen:
                continue
            # column_property() over an expression, nothing to write
            expr = prop.expression
            descriptors.append(
                FieldDescriptor(
                    name=prop.key,
                    db_name=expr.name if isinstance(expr, Column) else prop.key,
                    value=state.dict.get(prop.key),
                    is_ignored=True,
                )
            )

        return descriptors
