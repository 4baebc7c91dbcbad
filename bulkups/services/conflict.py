from bulkups.services.sql import quote_identifier


# Conflict handler
def get_conflict_fragments(sample, exclude_columns, provider) -> list:
    """
    Builds the `col`=VALUES(`col`) assignments of ON DUPLICATE KEY UPDATE, in the
    provider's field order. Primary and unique keys detect the conflict, so they
    are never rewritten.
    """
    fragments = []
    for field in provider.fields(sample):
        if (
            field.name in exclude_columns
            or not field.is_value_candidate
            or field.is_conflict_key
        ):
            continue

        column = quote_identifier(field.db_name)
        fragments.append(f"{column}=VALUES({column})")
    return fragments
