"""
Generator settings.

GeneratorSettings can be built directly, from a plain dict (e.g. parsed JSON or
YAML) or from STITCHGEN_* environment variables.
"""

from __future__ import annotations

import os
from dataclasses import asdict, dataclass, fields
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from ..errors import InvalidArgument
from .parameters import BlockedContextPolicy, DeadEndPolicy, SelectionMode

ENV_PREFIX = "STITCHGEN_"

_ENUM_FIELDS = {
    'dead_end_policy': DeadEndPolicy,
    'selection': SelectionMode,
    'blocked_context_policy': BlockedContextPolicy,
}
_TUPLE_FIELDS = ('level_bounds', 'start_position')


def _parse_bool(text: str) -> bool:
    value = text.strip().lower()
    if value in ("1", "true", "yes", "on"):
        return True
    if value in ("0", "false", "no", "off"):
        return False
    raise InvalidArgument(f"Expected a boolean, got {text!r}")


def _parse_floats(text: str) -> Tuple[float, ...]:
    try:
        return tuple(float(part) for part in text.replace(";", ",").split(",") if part.strip())
    except ValueError:
        raise InvalidArgument(f"Expected comma-separated numbers, got {text!r}") from None


def _parse_optional_int(text: str) -> Optional[int]:
    if text.strip().lower() in ("", "none"):
        return None
    try:
        return int(text)
    except ValueError:
        raise InvalidArgument(f"Expected an integer, got {text!r}") from None


def _parse_optional_float(text: str) -> Optional[float]:
    if text.strip().lower() in ("", "none"):
        return None
    try:
        return float(text)
    except ValueError:
        raise InvalidArgument(f"Expected a number, got {text!r}") from None


@dataclass
class GeneratorSettings:
    # Termination
    max_chunks: Optional[int] = None
    max_level_size: Optional[float] = None
    max_iterations: int = 1000

    # Dead ends
    dead_end_policy: DeadEndPolicy = DeadEndPolicy.BLOCK
    max_backtracks: int = 25

    # Strategies
    selection: SelectionMode = SelectionMode.OLDEST_FIRST
    blocked_context_policy: BlockedContextPolicy = BlockedContextPolicy.IGNORE

    # Seeding for reproducible generation
    seed: Optional[int] = None  # None = random seed, recorded on the result

    # Level geometry
    dimensions: int = 2
    level_bounds: Optional[Tuple[float, ...]] = None
    start_position: Optional[Tuple[float, ...]] = None

    # Misc
    validate_result: bool = True

    def __post_init__(self):
        for name, enum_cls in _ENUM_FIELDS.items():
            setattr(self, name, enum_cls.parse(getattr(self, name)))
        for name in _TUPLE_FIELDS:
            value = getattr(self, name)
            if value is not None:
                setattr(self, name, tuple(float(v) for v in value))

    def validate(self) -> None:
        """Raise InvalidArgument for values the generator cannot work with."""
        if self.max_chunks is not None and self.max_chunks < 1:
            raise InvalidArgument(f"max_chunks must be at least 1, got {self.max_chunks}")
        if self.max_level_size is not None and self.max_level_size <= 0:
            raise InvalidArgument(f"max_level_size must be positive, got {self.max_level_size}")
        if self.max_iterations < 1:
            raise InvalidArgument(f"max_iterations must be at least 1, got {self.max_iterations}")
        if self.max_backtracks < 0:
            raise InvalidArgument(f"max_backtracks must not be negative, got {self.max_backtracks}")
        if self.dimensions not in (2, 3):
            raise InvalidArgument(f"dimensions must be 2 or 3, got {self.dimensions}")
        if self.level_bounds is not None:
            if len(self.level_bounds) != self.dimensions:
                raise InvalidArgument(
                    f"level_bounds {self.level_bounds} do not match dimensions={self.dimensions}"
                )
            if any(b <= 0 for b in self.level_bounds):
                raise InvalidArgument(f"level_bounds must be positive, got {self.level_bounds}")
        if self.start_position is not None and len(self.start_position) != self.dimensions:
            raise InvalidArgument(
                f"start_position {self.start_position} does not match dimensions={self.dimensions}"
            )

    # -- serialization --

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        for name, value in data.items():
            if isinstance(value, Enum):
                data[name] = value.value
            elif isinstance(value, tuple):
                data[name] = list(value)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'GeneratorSettings':
        """Build settings from a dict, ignoring unknown keys."""
        if data is None:
            raise InvalidArgument("Settings data is required")
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})

    @classmethod
    def from_env(cls, prefix: str = ENV_PREFIX, environ=None) -> 'GeneratorSettings':
        """Build settings from environment variables such as STITCHGEN_MAX_CHUNKS."""
        environ = os.environ if environ is None else environ
        data: Dict[str, Any] = {}
        for f in fields(cls):
            raw = environ.get(prefix + f.name.upper())
            if raw is None:
                continue
            if f.name in _ENUM_FIELDS:
                data[f.name] = raw
            elif f.name in _TUPLE_FIELDS:
                data[f.name] = _parse_floats(raw) or None
            elif f.name == 'validate_result':
                data[f.name] = _parse_bool(raw)
            elif f.name == 'max_level_size':
                data[f.name] = _parse_optional_float(raw)
            elif f.name in ('max_chunks', 'seed'):
                data[f.name] = _parse_optional_int(raw)
            else:
                value = _parse_optional_int(raw)
                if value is None:
                    raise InvalidArgument(f"{prefix + f.name.upper()} requires an integer")
                data[f.name] = value
        return cls(**data)
