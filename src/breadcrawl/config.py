from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

try:  # Python 3.11+
    import tomllib
except ModuleNotFoundError:  # pragma: no cover - fallback for 3.10
    import tomli as tomllib  # type: ignore[no-redef]

from .expansion import DEFAULT_DENSITY_CEILING
from .rooms import RoomType
from .settings import DEFAULT_ROOM_SETTINGS, RoomSettings, SettingsEntry


@dataclass(frozen=True)
class GenerationConfig:
    height: int = 25
    width: int = 25
    target_rooms: int = 120
    density_ceiling: float = DEFAULT_DENSITY_CEILING
    seed: Optional[int] = None


@dataclass(frozen=True)
class EvaluationConfig:
    candidate_count: int = 1
    weights: Mapping[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class Config:
    generation: GenerationConfig
    rooms: RoomSettings
    evaluation: EvaluationConfig


_ROOM_KEYS = {
    "event_chance_percent": "spawn_chance_percent",
    "event_divisor": "count_divisor",
    "event_max_count": "max_count",
}


def default_config() -> Config:
    return Config(
        generation=GenerationConfig(),
        rooms=DEFAULT_ROOM_SETTINGS,
        evaluation=EvaluationConfig(),
    )


def _int_value(section: str, key: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise ValueError(f"{section}.{key} must be an integer, got {value!r}.")
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{section}.{key} must be an integer, got {value!r}.") from None


def _float_value(section: str, key: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise ValueError(f"{section}.{key} must be a number, got {value!r}.")
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"{section}.{key} must be a number, got {value!r}.") from None


def _parse_generation(raw: Any) -> GenerationConfig:
    if raw is None:
        return GenerationConfig()
    if not isinstance(raw, Mapping):
        raise ValueError("[generation] must be a table.")
    defaults = GenerationConfig()
    height = _int_value("generation", "height", raw.get("height", defaults.height))
    width = _int_value("generation", "width", raw.get("width", defaults.width))
    if height < 3 or width < 3:
        raise ValueError(f"generation.height and generation.width must be at least 3, got {height}x{width}.")
    target_rooms = _int_value("generation", "target_rooms", raw.get("target_rooms", defaults.target_rooms))
    if target_rooms < 1:
        raise ValueError("generation.target_rooms must be positive.")
    density_ceiling = _float_value("generation", "density_ceiling", raw.get("density_ceiling", defaults.density_ceiling))
    if not 0 < density_ceiling <= 1:
        raise ValueError("generation.density_ceiling must be in (0, 1].")
    seed_raw = raw.get("seed")
    seed = None if seed_raw is None else _int_value("generation", "seed", seed_raw)
    return GenerationConfig(
        height=height,
        width=width,
        target_rooms=target_rooms,
        density_ceiling=density_ceiling,
        seed=seed,
    )


def _parse_rooms(raw: Any) -> RoomSettings:
    if raw is None:
        return DEFAULT_ROOM_SETTINGS
    if not isinstance(raw, Mapping):
        raise ValueError("[rooms] must be a table.")
    entries: Dict[RoomType, SettingsEntry] = {}
    colors: Dict[RoomType, str] = {}
    for name, values in raw.items():
        room_type = RoomType.from_name(str(name))
        if room_type is None:
            raise ValueError(f"Unknown room type '{name}' under [rooms].")
        if not isinstance(values, Mapping):
            raise ValueError(f"[rooms.{name}] must be a table.")
        section = f"rooms.{name}"
        color = values.get("color")
        if color is not None:
            colors[room_type] = str(color).strip()
        overrides = {
            field_name: _int_value(section, key, values[key])
            for key, field_name in _ROOM_KEYS.items()
            if key in values
        }
        if overrides:
            base = DEFAULT_ROOM_SETTINGS.entries.get(room_type, SettingsEntry())
            entries[room_type] = replace(base, **overrides)
    return DEFAULT_ROOM_SETTINGS.replace_entries(entries, colors)


def _parse_evaluation(raw: Any) -> EvaluationConfig:
    if raw is None:
        raw = {}
    if not isinstance(raw, Mapping):
        raise ValueError("[evaluation] must be a table if provided.")
    candidate_count = _int_value("evaluation", "candidate_count", raw.get("candidate_count", 1))
    weights_raw = raw.get("weights", {})
    if weights_raw is None:
        weights_raw = {}
    if not isinstance(weights_raw, Mapping):
        raise ValueError("[evaluation.weights] must be a table if provided.")
    weights = {str(key): _float_value("evaluation.weights", str(key), value) for key, value in weights_raw.items()}
    return EvaluationConfig(candidate_count=max(1, candidate_count), weights=weights)


def parse_config(raw: Mapping[str, Any]) -> Config:
    return Config(
        generation=_parse_generation(raw.get("generation")),
        rooms=_parse_rooms(raw.get("rooms")),
        evaluation=_parse_evaluation(raw.get("evaluation")),
    )


def load_config(path: str | Path) -> Config:
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with config_path.open("rb") as handle:
        raw = tomllib.load(handle)
    return parse_config(raw)
