"""Game settings and their validation."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path

logger = logging.getLogger(__name__)

# Inclusive (low, high) bounds per setting.
ROWS_RANGE = (10, 30)
COLS_RANGE = (10, 30)
SPEED_RANGE = (1, 10)
WIN_FOOD_COUNT_RANGE = (5, 50)

_RANGES: dict[str, tuple[int, int]] = {
    "rows_count": ROWS_RANGE,
    "cols_count": COLS_RANGE,
    "speed": SPEED_RANGE,
    "win_food_count": WIN_FOOD_COUNT_RANGE,
}


class InvalidSettingsError(ValueError):
    """Raised when settings fail validation; carries every violation."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        super().__init__("\n".join(self.errors))


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of :meth:`GameSettings.validate`."""

    is_valid: bool
    errors: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class GameSettings:
    """Settings for one game session.

    Construction never raises; call :meth:`validate` or
    :meth:`require_valid` before using the settings to build a session.
    """

    rows_count: int = 21
    cols_count: int = 21
    speed: int = 4
    win_food_count: int = 5

    @property
    def tick_interval(self) -> float:
        """Seconds between ticks."""
        return 1.0 / self.speed

    @property
    def tick_interval_ms(self) -> float:
        return 1000.0 / self.speed

    def validate(self) -> ValidationResult:
        """Check every field against its range, collecting all violations."""
        errors: list[str] = []
        for name, (low, high) in _RANGES.items():
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                errors.append(f"{name} must be an integer, got {value!r}.")
            elif not low <= value <= high:
                errors.append(
                    f"{name} must be in the range [{low}, {high}], got {value}."
                )
        return ValidationResult(is_valid=not errors, errors=errors)

    def require_valid(self) -> GameSettings:
        """Return ``self`` or raise :class:`InvalidSettingsError`."""
        result = self.validate()
        if not result.is_valid:
            raise InvalidSettingsError(result.errors)
        return self

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> GameSettings:
        """Build settings from a mapping, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise InvalidSettingsError(
                [f"Unknown setting '{name}'." for name in unknown]
            )
        return cls(**data)

    def save(self, path: str | Path) -> None:
        """Write settings to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Settings saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> GameSettings:
        """Load settings from a JSON file."""
        raw = json.loads(Path(path).read_text())
        if not isinstance(raw, dict):
            raise InvalidSettingsError(["Settings file must contain a JSON object."])
        return cls.from_dict(raw)
