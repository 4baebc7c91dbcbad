"""
Errors raised while building or executing bulk upsert statements.
"""


class BulkUpsertError(Exception):
    """Base class for every bulk upsert failure."""


class ShapeError(BulkUpsertError, TypeError):
    """A record is not of the structured shape the metadata provider expects."""


class InconsistentShapeError(BulkUpsertError, ValueError):
    """Records of one batch resolve to different attribute sets."""

    def __init__(self, expected, actual, index=None):
        self.expected = tuple(expected)
        self.actual = tuple(actual)
        self.index = index
        super().__init__(
            f"records have inconsistent attributes: expected {len(self.expected)} "
            f"columns {list(self.expected)}, record {index} has {len(self.actual)} "
            f"columns {list(self.actual)}"
        )


class ExecutionError(BulkUpsertError):
    """The database rejected a statement."""

    def __init__(self, message, statement=None, orig=None):
        super().__init__(message)
        self.statement = statement
        self.orig = orig
