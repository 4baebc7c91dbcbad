def quote_identifier(name: str) -> str:
    return "`" + name.replace("`", "``") + "`"


def quote_table(name: str) -> str:
    """schema.table is quoted per part."""
    return ".".join(quote_identifier(part) for part in name.split("."))
