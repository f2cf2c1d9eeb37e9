import os
from dataclasses import dataclass, fields
from typing import Any, Mapping, Optional, Tuple

LIMITS = {
    "width": (15, 1999),
    "height": (15, 1999),
}


class InvalidMapConfiguration(ValueError):
    """Raised when map dimensions or generation knobs are unusable."""


def check_dimensions(width, height) -> None:
    """Fail fast unless both dimensions are odd ints within LIMITS.

    Odd sizes keep the stride-2 carving lattice aligned so a wall always
    separates two passable cells.
    """
    for name, value in (("width", width), ("height", height)):
        lo, hi = LIMITS[name]
        if not value:
            raise InvalidMapConfiguration(f"map {name} is required")
        if not isinstance(value, int) or isinstance(value, bool):
            raise InvalidMapConfiguration(f"map {name} must be an integer (got {value!r})")
        if value % 2 == 0:
            raise InvalidMapConfiguration(f"map {name} must be odd (got {value})")
        if value < lo or value > hi:
            raise InvalidMapConfiguration(f"invalid map {name} {value}, must be within {lo}..{hi}")


@dataclass
class MapConfig:
    width: int = 121
    height: int = 71
    min_room_size: int = 5
    max_room_size: int = 11
    allow_room_overlap: bool = False
    num_room_attempts: int = 100
    cave_width: int = 24
    cave_height: int = 10
    num_caves: int = 20
    cave_setting: Tuple[int, ...] = ()
    num_extra_connectors: int = 10
    connector_thickness: int = 1
    straight_tendency: float = 0.5
    island_threshold: int = 15
    seed: Optional[int] = None

    def validate(self) -> "MapConfig":
        check_dimensions(self.width, self.height)
        if self.min_room_size < 1 or self.max_room_size < self.min_room_size:
            raise InvalidMapConfiguration(
                f"room size bounds {self.min_room_size}..{self.max_room_size} are invalid"
            )
        if self.cave_width < 1 or self.cave_height < 1:
            raise InvalidMapConfiguration("cave dimensions must be positive")
        if self.connector_thickness < 1:
            raise InvalidMapConfiguration("connector_thickness must be at least 1")
        if not 0.0 <= self.straight_tendency <= 1.0:
            raise InvalidMapConfiguration("straight_tendency must be within 0..1")
        for name in ("num_room_attempts", "num_caves", "num_extra_connectors", "island_threshold"):
            if getattr(self, name) < 0:
                raise InvalidMapConfiguration(f"{name} must not be negative")
        return self

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], **overrides) -> "MapConfig":
        """Build a config from loosely typed values (query args, env vars).

        Unknown keys are ignored; values are coerced to the field's type.
        Coercion failures surface as InvalidMapConfiguration.
        """
        kwargs = {}
        for f in fields(cls):
            if f.name not in data:
                continue
            raw = data[f.name]
            try:
                kwargs[f.name] = _coerce(f.name, raw)
            except (TypeError, ValueError) as exc:
                raise InvalidMapConfiguration(f"bad value for {f.name}: {raw!r}") from exc
        kwargs.update(overrides)
        return cls(**kwargs)

    @classmethod
    def from_env(cls, prefix: str = "DELVER_MAP_", **overrides) -> "MapConfig":
        data = {}
        for f in fields(cls):
            key = prefix + f.name.upper()
            if key in os.environ:
                data[f.name] = os.environ[key]
        return cls.from_mapping(data, **overrides)


_INT_FIELDS = {
    "width",
    "height",
    "min_room_size",
    "max_room_size",
    "num_room_attempts",
    "cave_width",
    "cave_height",
    "num_caves",
    "num_extra_connectors",
    "connector_thickness",
    "island_threshold",
}


def _coerce(name: str, raw: Any) -> Any:
    if name in _INT_FIELDS:
        return int(raw)
    if name == "seed":
        return None if raw in (None, "") else int(raw)
    if name == "straight_tendency":
        return float(raw)
    if name == "allow_room_overlap":
        if isinstance(raw, str):
            return raw.strip().lower() not in {"0", "false", "no", "off", ""}
        return bool(raw)
    if name == "cave_setting":
        if isinstance(raw, str):
            return tuple(int(p) for p in raw.replace(";", ",").split(",") if p.strip())
        return tuple(int(v) for v in raw)
    return raw


__all__ = ["MapConfig", "InvalidMapConfiguration", "LIMITS", "check_dimensions"]
