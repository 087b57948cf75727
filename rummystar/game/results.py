"""Result types returned by validators and session transitions."""

from __future__ import annotations

from dataclasses import dataclass, field

from rummystar.game.models import Session


@dataclass
class ValidationResult:
    valid: bool
    error: str | None = None
    error_code: str | None = None


@dataclass
class ActionResult:
    """Outcome of one session transition.

    On failure ``session`` is the input session object itself, unless the
    failed action still latched state (a refused entry raising the entry
    prohibition); then it is a new session carrying only that change.
    """

    success: bool
    session: Session
    error: str | None = None
    error_code: str | None = None
    events: list[dict] = field(default_factory=list)

    @classmethod
    def fail(cls, session: Session, error_code: str, error: str) -> ActionResult:
        return cls(success=False, session=session, error=error, error_code=error_code)
