"""
Dungeon Generation Pipeline Module.

Provides staged dungeon generation, settings handling and the error types
raised along the way.
"""

from .errors import (
    GenerationError,
    InvalidSettingsError,
    SettingsLoadError,
)

from .settings import (
    GenerationSettings,
    load_settings,
    save_settings,
)

from .dungeon_pipeline import (
    DungeonPipeline,
    Dungeon,
    PipelineResult,
    PipelineProgress,
    PipelineStage,
    generate_dungeon,
    resolve_seed,
)

__all__ = [
    # Pipeline core
    'DungeonPipeline',
    'Dungeon',
    'PipelineResult',
    'PipelineProgress',
    'PipelineStage',
    'generate_dungeon',
    'resolve_seed',
    # Settings
    'GenerationSettings',
    'load_settings',
    'save_settings',
    # Errors
    'GenerationError',
    'InvalidSettingsError',
    'SettingsLoadError',
]
