"""Out limit / compel point / scoot point configuration."""

from __future__ import annotations

import copy
import json
import logging

from rummystar.game.models import Session, Thresholds
from rummystar.game.results import ActionResult, ValidationResult
from rummystar.game.scoring import reconcile
from rummystar.utils.constants import (
    FIELD_COMPEL_POINT,
    FIELD_OUT_LIMIT,
    FIELD_SCOOT_POINT,
    INVALID_THRESHOLD,
    THRESHOLD_FIELDS,
)

logger = logging.getLogger("rummystar.thresholds")


def derive_thresholds(field: str, value: int, current: Thresholds) -> Thresholds:
    """Apply an edit to one threshold and recompute the dependent one.

    Editing out_limit or compel_point holds scoot_point fixed; editing
    scoot_point holds out_limit fixed. In every case
    compel_point == out_limit - scoot_point + 1 afterwards.
    """
    if field == FIELD_OUT_LIMIT:
        return Thresholds(
            out_limit=value,
            compel_point=value - current.scoot_point + 1,
            scoot_point=current.scoot_point,
        )
    if field == FIELD_COMPEL_POINT:
        return Thresholds(
            out_limit=value + current.scoot_point - 1,
            compel_point=value,
            scoot_point=current.scoot_point,
        )
    if field == FIELD_SCOOT_POINT:
        return Thresholds(
            out_limit=current.out_limit,
            compel_point=current.out_limit - value + 1,
            scoot_point=value,
        )
    raise ValueError(f"Unknown threshold field: {field}")


def validate_thresholds(thresholds: Thresholds) -> ValidationResult:
    if thresholds.scoot_point < 1:
        return ValidationResult(
            valid=False,
            error_code=INVALID_THRESHOLD,
            error=f"Scoot point must be at least 1 (got {thresholds.scoot_point})",
        )
    return ValidationResult(valid=True)


def update_threshold(session: Session, field: str, value: int) -> ActionResult:
    """Edit one threshold, derive the others and re-check eliminations."""
    if field not in THRESHOLD_FIELDS:
        return ActionResult.fail(
            session, INVALID_THRESHOLD, f"Unknown threshold: {field}"
        )
    if isinstance(value, bool) or not isinstance(value, int):
        return ActionResult.fail(
            session, INVALID_THRESHOLD, f"Threshold must be a whole number: {value!r}"
        )

    thresholds = derive_thresholds(field, value, session.thresholds)
    result = validate_thresholds(thresholds)
    if not result.valid:
        return ActionResult.fail(session, result.error_code, result.error)

    updated = copy.deepcopy(session)
    updated.thresholds = thresholds
    eliminated = reconcile(updated)

    event = {
        "event": "thresholds_changed",
        "field": field,
        "out_limit": thresholds.out_limit,
        "compel_point": thresholds.compel_point,
        "scoot_point": thresholds.scoot_point,
        "eliminated": eliminated,
    }
    logger.info(json.dumps(event))
    return ActionResult(success=True, session=updated, events=[event])
