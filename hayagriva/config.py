from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union, get_args

import yaml

from hayagriva.core.emitter import MIME_TYPES
from hayagriva.core.errors import ConfigError
from hayagriva.core.extractor import is_identifier
from hayagriva.core.protocol import DEFAULT_APP_NAME, CssFramework, Framework, GenerationOptions

DEFAULT_CONFIG_FILE = "hayagriva.yaml"
ENV_PREFIX = "HAYAGRIVA_"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass
class GeneratorConfig:
    default_app_name: str = DEFAULT_APP_NAME
    framework: str = "react"
    css_framework: str = "tailwind"
    responsive: bool = True
    accessibility: bool = True
    bundle_extension: str = "jsx"
    widget_name: str = "Hayagriva"
    output_dir: str = "generated"
    log_level: str = "INFO"

    def validate(self) -> "GeneratorConfig":
        if not is_identifier(self.default_app_name):
            raise ConfigError(f"default_app_name must be an identifier, got {self.default_app_name!r}")
        if self.framework not in get_args(Framework):
            raise ConfigError(f"Unknown framework {self.framework!r}; expected one of {', '.join(get_args(Framework))}")
        if self.css_framework not in get_args(CssFramework):
            raise ConfigError(
                f"Unknown css_framework {self.css_framework!r}; expected one of {', '.join(get_args(CssFramework))}"
            )
        if self.bundle_extension not in MIME_TYPES:
            raise ConfigError(
                f"Unknown bundle_extension {self.bundle_extension!r}; expected one of {', '.join(MIME_TYPES)}"
            )
        if self.log_level.upper() not in LOG_LEVELS:
            raise ConfigError(f"Unknown log_level {self.log_level!r}")
        if not self.widget_name.strip():
            raise ConfigError("widget_name must not be empty")
        return self

    def generation_options(self) -> GenerationOptions:
        return GenerationOptions(
            framework=self.framework,
            css_framework=self.css_framework,
            responsive=self.responsive,
            accessibility=self.accessibility,
        )

    def with_overrides(self, **overrides: Any) -> "GeneratorConfig":
        """Copy with every non-None override applied, then validated."""
        values = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **values).validate()


def _parse_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ConfigError(f"{name} must be a boolean, got {value!r}")


def _coerce(values: Mapping[str, Any], source: str) -> Dict[str, Any]:
    known = {f.name: f for f in fields(GeneratorConfig)}
    out: Dict[str, Any] = {}
    for key, value in values.items():
        if key not in known:
            raise ConfigError(f"Unknown config key {key!r} in {source}")
        if known[key].type in ("bool", bool):
            out[key] = _parse_bool(key, value)
        else:
            out[key] = str(value)
    return out


def _env_values(env: Mapping[str, str]) -> Dict[str, str]:
    values: Dict[str, str] = {}
    for f in fields(GeneratorConfig):
        key = ENV_PREFIX + f.name.upper()
        if key in env:
            values[f.name] = env[key]
    return values


def load_config(
    path: Optional[Union[str, Path]] = None,
    env: Optional[Mapping[str, str]] = None,
) -> GeneratorConfig:
    """
    Defaults, then the YAML file, then HAYAGRIVA_* environment variables.

    `path` defaults to ./hayagriva.yaml and is skipped when that file does not
    exist; an explicit path must exist.
    """
    cfg_path = Path(path) if path is not None else Path(DEFAULT_CONFIG_FILE)
    file_values: Dict[str, Any] = {}
    if cfg_path.exists():
        try:
            raw = yaml.safe_load(cfg_path.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Could not parse {cfg_path}: {e}") from e
        if not isinstance(raw, dict):
            raise ConfigError(f"{cfg_path} must contain a mapping at the top level")
        file_values = _coerce(raw, str(cfg_path))
    elif path is not None:
        raise ConfigError(f"Config file not found: {cfg_path}")

    env_values = _coerce(_env_values(os.environ if env is None else env), "environment")
    cfg = GeneratorConfig(**{**file_values, **env_values})
    return cfg.validate()
