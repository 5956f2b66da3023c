"""
Generation settings and their JSON persistence.

Settings are an immutable value object; use ``dataclasses.replace`` (or
``with_seed``) to derive variants.
"""

from __future__ import annotations
import json
import logging
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, List, Union

from .errors import InvalidSettingsError, SettingsLoadError

logger = logging.getLogger(__name__)


# camelCase names accepted in settings files, mapped to field names
_ALIASES = {
    'gridWidth': 'grid_width',
    'gridHeight': 'grid_height',
    'roomCount': 'room_count',
    'minRoomWidth': 'min_room_width',
    'minRoomHeight': 'min_room_height',
    'maxRoomWidth': 'max_room_width',
    'maxRoomHeight': 'max_room_height',
    'maxRoomAttempts': 'max_room_attempts',
    'maxHallwayExpansion': 'max_hallway_expansion',
    'hallwayExpansion': 'max_hallway_expansion',
    'extraHallwayGenerationChance': 'extra_hallway_generation_chance',
    'roomSpacing': 'room_spacing',
}


@dataclass(frozen=True)
class GenerationSettings:
    # Seeding; 0 asks the pipeline for a time-derived seed
    seed: int = 0

    # Grid
    grid_width: int = 128
    grid_height: int = 128

    # Rooms
    room_count: int = 20
    min_room_width: int = 7
    min_room_height: int = 7
    max_room_width: int = 25
    max_room_height: int = 25
    max_room_attempts: int = 5
    room_spacing: int = 1

    # Corridors
    max_hallway_expansion: int = 2
    extra_hallway_generation_chance: float = 0.0

    def validate(self) -> List[str]:
        """Return a list of problems; empty when the settings are usable."""
        errors = []
        if self.grid_width <= 0 or self.grid_height <= 0:
            errors.append("Grid dimensions must be positive")
        if self.room_count < 0:
            errors.append("Room count cannot be negative")
        if self.min_room_width < 1 or self.min_room_height < 1:
            errors.append("Minimum room size must be at least 1x1")
        if self.max_room_width < self.min_room_width:
            errors.append("Maximum room width must be >= minimum room width")
        if self.max_room_height < self.min_room_height:
            errors.append("Maximum room height must be >= minimum room height")
        if self.max_room_width > self.grid_width:
            errors.append(
                f"Grid width {self.grid_width} is smaller than maximum room width {self.max_room_width}"
            )
        if self.max_room_height > self.grid_height:
            errors.append(
                f"Grid height {self.grid_height} is smaller than maximum room height {self.max_room_height}"
            )
        if self.max_room_attempts < 1:
            errors.append("Max room attempts must be at least 1")
        if self.room_spacing < 0:
            errors.append("Room spacing cannot be negative")
        if self.max_hallway_expansion < 1:
            errors.append("Max hallway expansion must be at least 1")
        if not 0.0 <= self.extra_hallway_generation_chance <= 100.0:
            errors.append("Extra hallway chance must be between 0 and 100")
        return errors

    def validate_or_raise(self) -> None:
        errors = self.validate()
        if errors:
            raise InvalidSettingsError(f"Invalid settings: {'; '.join(errors)}")

    def with_seed(self, seed: int) -> "GenerationSettings":
        return replace(self, seed=seed)

    # -- serialization --

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GenerationSettings":
        """Create settings from a mapping of snake_case or camelCase keys.

        Raises:
            InvalidSettingsError: On unknown keys or values of the wrong type
        """
        known = {f.name: f for f in fields(cls)}
        kwargs: Dict[str, Any] = {}
        for key, value in data.items():
            name = _ALIASES.get(key, key)
            if name not in known:
                raise InvalidSettingsError(f"Unknown setting: {key}")
            if name == 'extra_hallway_generation_chance':
                if isinstance(value, bool) or not isinstance(value, (int, float)):
                    raise InvalidSettingsError(f"Setting {key} must be a number")
                value = float(value)
            elif isinstance(value, bool) or not isinstance(value, int):
                raise InvalidSettingsError(f"Setting {key} must be an integer")
            kwargs[name] = value
        return cls(**kwargs)


def load_settings(file_path: Union[str, Path]) -> GenerationSettings:
    """
    Load generation settings from a JSON file.

    Args:
        file_path: Path to a JSON object of settings

    Returns:
        Parsed GenerationSettings (not yet validated)

    Raises:
        SettingsLoadError: If the file is missing or is not a JSON object
        InvalidSettingsError: If the object holds unknown or mistyped keys
    """
    path = Path(file_path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except OSError as e:
        raise SettingsLoadError(f"Cannot read settings file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise SettingsLoadError(f"Malformed settings file {path}: {e}") from e

    if not isinstance(data, dict):
        raise SettingsLoadError(f"Settings file {path} must contain a JSON object")

    logger.debug("Loaded settings from %s", path)
    return GenerationSettings.from_dict(data)


def save_settings(settings: GenerationSettings, file_path: Union[str, Path]) -> Path:
    """Write settings as pretty-printed JSON; returns the path written."""
    path = Path(file_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(settings.to_dict(), f, indent=2)
    return path
