"""
Engine error translation for route handlers.

Usage:
    with engine_errors():
        scoring = score_race(results)
"""

import logging
from contextlib import contextmanager

from fastapi import HTTPException

from xcstats.shared.errors import DuplicateResultError, InsufficientDataError

logger = logging.getLogger(__name__)


@contextmanager
def engine_errors():
    """Map engine exceptions to HTTP errors."""
    try:
        yield
    except DuplicateResultError as e:
        logger.error(f"Rejected batch: {e}")
        raise HTTPException(
            status_code=409,
            detail={
                "error": "duplicate_result",
                "athlete_id": e.athlete_id,
                "race_id": e.race_id,
                "result_ids": e.result_ids,
            },
        )
    except InsufficientDataError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
