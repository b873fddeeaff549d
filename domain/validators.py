"""
Validation helpers for player signals and catalog data.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Mapping, Optional

from pydantic import ValidationError

from .models import GameDesignPattern, RawPlayerSignals


class SignalValidationError(ValueError):
    """Raised when raw player signals are missing a field or out of range."""

    def __init__(self, field: str, reason: str) -> None:
        super().__init__(f"Invalid player signals: {field}: {reason}")
        self.field = field
        self.reason = reason


@dataclass(frozen=True)
class SignalValidation:
    """Tagged result of signal validation: either parsed signals or a failure reason."""
    ok: bool
    signals: Optional[RawPlayerSignals] = None
    field: Optional[str] = None
    reason: Optional[str] = None

    def unwrap(self) -> RawPlayerSignals:
        if not self.ok or self.signals is None:
            raise SignalValidationError(self.field or "signals", self.reason or "invalid")
        return self.signals


def _first_error(e: ValidationError) -> tuple[str, str]:
    err = e.errors()[0]
    loc = err.get("loc") or ()
    field = str(loc[0]) if loc else "signals"
    if err.get("type") == "missing":
        return field, "required field is missing"
    msg = err.get("msg", "invalid value")
    # pydantic prefixes custom validator messages
    if msg.startswith("Value error, "):
        msg = msg[len("Value error, "):]
    return field, msg


def validate_signals(data: Any) -> SignalValidation:
    """Validate a signals mapping without raising; the result names the offending field."""
    if isinstance(data, RawPlayerSignals):
        return SignalValidation(ok=True, signals=data)
    if not isinstance(data, Mapping):
        return SignalValidation(ok=False, field="signals", reason="signals must be a mapping")
    try:
        return SignalValidation(ok=True, signals=RawPlayerSignals.model_validate(dict(data)))
    except ValidationError as e:
        field, reason = _first_error(e)
        return SignalValidation(ok=False, field=field, reason=reason)


def validate_catalog(data: List[dict]) -> List[GameDesignPattern]:
    """Validate catalog entries; raises helpful error if invalid."""
    try:
        return [GameDesignPattern.model_validate(item) for item in data]
    except ValidationError as e:
        # Re-raise with a cleaner message for callers
        raise ValueError(f"Catalog validation failed: {e}")
