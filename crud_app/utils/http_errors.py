"""Translation of persistence failures into HTTP responses."""

import logging

from fastapi import HTTPException, status
from sqlalchemy.exc import SQLAlchemyError


def store_failure(logger: logging.Logger, handler: str, problem: str,
                  exc: SQLAlchemyError) -> HTTPException:
    """
    Log a persistence failure and build the matching 500 response.

    The database message goes to the log only; clients get a generic detail.

    Usage:
        except SQLAlchemyError as exc:
            raise store_failure(logger, "get_all_books", "reading books", exc) from exc
    """
    logger.error(
        f"{handler} failed while {problem}: {exc}",
        extra={"handler": handler, "problem": problem},
    )
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="A database error occurred. Please try again later.",
    )
