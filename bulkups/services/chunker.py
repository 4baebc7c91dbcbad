from typing import Sequence


def split(records: Sequence, chunk_size: int) -> list:
    """
    Splits records into consecutive chunks of at most chunk_size, keeping order.
    """
    if isinstance(chunk_size, bool) or not isinstance(chunk_size, int) or chunk_size < 1:
        raise ValueError(f"chunk_size must be a positive integer, got {chunk_size!r}")

    records = list(records)
    return [records[i:i + chunk_size] for i in range(0, len(records), chunk_size)]
