"""Translation of driver errors into gator store errors."""

from contextlib import contextmanager
from typing import Generator

import psycopg
from psycopg import errors as pg_errors

from ..errors import StoreError, UniqueViolation


@contextmanager
def store_errors(action: str) -> Generator[None, None, None]:
    """Re-raise psycopg errors from the block as StoreError subclasses."""
    try:
        yield
    except pg_errors.UniqueViolation as e:
        raise UniqueViolation(
            f"{action}: {e.diag.message_primary or e}",
            constraint=e.diag.constraint_name,
        ) from e
    except psycopg.Error as e:
        raise StoreError(f"{action}: {e}") from e
