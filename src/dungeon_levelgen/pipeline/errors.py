"""Exceptions raised by dungeon generation."""


class GenerationError(Exception):
    pass


class InvalidSettingsError(GenerationError):
    pass


class SettingsLoadError(GenerationError):
    pass
