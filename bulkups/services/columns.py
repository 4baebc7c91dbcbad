from bulkups.services.attributes import extract_attributes
from bulkups.services.conflict import get_conflict_fragments


def resolve(sample, exclude_columns, provider):
    """
    Computes the ordered column list and the conflict fragments from one sample
    record. Columns are sorted by name so the SQL text is reproducible and the
    placeholders line up with the values of every record.

    Returns: Tuple (columns, conflict_fragments)
    """
    exclude_columns = frozenset(exclude_columns)
    columns = sorted(extract_attributes(sample, exclude_columns, provider))
    return columns, get_conflict_fragments(sample, exclude_columns, provider)
