from __future__ import annotations


class ConfigError(ValueError):
    """Invalid generator configuration (file, environment or CLI flags)."""


class TranscriptError(ValueError):
    """A transcript file that is not a JSON list of {role, content} objects."""
