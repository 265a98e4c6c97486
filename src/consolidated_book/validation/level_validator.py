"""Validate incoming level updates against the LevelUpdate model."""

import logging
from typing import Any

from pydantic import ValidationError

from consolidated_book.errors import InvalidLevelData
from consolidated_book.metrics.prometheus import INVALID_UPDATES_TOTAL
from consolidated_book.models.level import LevelUpdate

logger = logging.getLogger(__name__)


def validate_level(raw: dict[str, Any]) -> LevelUpdate:
    """Parse and validate a raw level update.

    Raises InvalidLevelData when price or quantity is non-numeric, NaN,
    infinite or negative.
    """
    try:
        return LevelUpdate.model_validate(raw)
    except ValidationError as exc:
        INVALID_UPDATES_TOTAL.inc()
        logger.warning(
            "Rejected level update for venue %s: %s",
            raw.get("venue", "unknown"),
            exc,
        )
        raise InvalidLevelData(
            f"invalid level update: {exc.error_count()} error(s)",
            errors=exc.errors(include_url=False),
        ) from exc
