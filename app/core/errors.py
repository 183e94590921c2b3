"""
Translate Supabase/PostgREST failures into HTTP errors
"""

from fastapi import HTTPException, status
from postgrest.exceptions import APIError
import logging

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"
NO_ROWS = "PGRST116"  # .single() matched zero rows


def to_http_exception(exc: Exception, resource: str = "Record") -> HTTPException:
    """Map an exception raised by a Supabase call to an HTTPException."""
    if isinstance(exc, HTTPException):
        return exc
    if isinstance(exc, APIError):
        code = exc.code
        if code == UNIQUE_VIOLATION:
            return HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=f"{resource} conflicts with an existing record: {exc.message}"
            )
        if code == FOREIGN_KEY_VIOLATION:
            return HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=f"{resource} references a missing or in-use record: {exc.message}"
            )
        if code == NO_ROWS:
            return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{resource} not found")
        logger.error(f"Supabase error on {resource}: {code} {exc.message}")
        return HTTPException(status_code=500, detail=exc.message or str(exc))
    return HTTPException(status_code=500, detail=str(exc))
