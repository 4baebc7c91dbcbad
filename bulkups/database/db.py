from sqlalchemy import create_engine

from bulkups.config import DATABASE_URL


def get_engine(url: str = None, **kwargs):
    """
    Builds an engine for `url`, falling back to DATABASE_URL from the environment.
    """
    url = url or DATABASE_URL
    if not url:
        raise ValueError("No DATABASE_URL set")

    kwargs.setdefault("echo", False)
    try:
        return create_engine(url, **kwargs)
    except Exception as e:
        raise RuntimeError(f"Database setup failed: {e}") from e
