"""Configuration for the template-aware language service.

Settings are read from environment variables by default and can be
overridden by a JSON or YAML file (e.g. `.tmpl-lens.json`).

Environment Variables:
    TMPL_LENS_TAGS: Comma separated template literal tags (default: html,svg,css)
    TMPL_LENS_CACHE: Cache located templates per document version (default: 1)
    TMPL_LENS_TRACE_DISPATCH: Trace every dispatch decision (default: 0)
"""

import json
import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml

logger = logging.getLogger(__name__)

DEFAULT_TAGS = "html,svg,css"


class ConfigError(ValueError):
    """Raised when a configuration file cannot be parsed or is invalid."""


_TRUE_VALUES = ("1", "true", "yes")
_FALSE_VALUES = ("0", "false", "no", "")


def _env_flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).lower() in _TRUE_VALUES


def _as_flag(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str) and value.strip().lower() in _TRUE_VALUES + _FALSE_VALUES:
        return value.strip().lower() in _TRUE_VALUES
    raise ConfigError(f"'{key}' must be a boolean, got {value!r}")


def _env_tags() -> List[str]:
    raw = os.environ.get("TMPL_LENS_TAGS", DEFAULT_TAGS)
    return [tag.strip() for tag in raw.split(",") if tag.strip()]


@dataclass
class TemplateServiceConfig:
    """Settings for locating templates and dispatching requests.

    Attributes:
        tags: Tag names whose template literals are treated as templates.
        cache_templates: Reuse located templates until the document version changes.
        trace_dispatch: Write one trace line per replace/merge decision.
    """
    tags: List[str] = field(default_factory=_env_tags)
    cache_templates: bool = field(default_factory=lambda: _env_flag("TMPL_LENS_CACHE", "1"))
    trace_dispatch: bool = field(default_factory=lambda: _env_flag("TMPL_LENS_TRACE_DISPATCH", "0"))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TemplateServiceConfig":
        """Build a config from a dict, keeping env defaults for missing keys."""
        known = {f.name for f in fields(cls)}
        kwargs: Dict[str, Any] = {}

        for key, value in data.items():
            if key not in known:
                logger.warning("Ignoring unknown config key: %s", key)
                continue
            kwargs[key] = value

        tags = kwargs.get("tags")
        if isinstance(tags, str):
            kwargs["tags"] = [tag.strip() for tag in tags.split(",") if tag.strip()]
        elif tags is not None and not isinstance(tags, list):
            raise ConfigError(f"'tags' must be a list or comma separated string, got {type(tags).__name__}")

        for key in ("cache_templates", "trace_dispatch"):
            if key in kwargs:
                kwargs[key] = _as_flag(key, kwargs[key])

        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tags": list(self.tags),
            "cache_templates": self.cache_templates,
            "trace_dispatch": self.trace_dispatch,
        }


def load_config(path: Union[str, Path]) -> TemplateServiceConfig:
    """Load configuration from a JSON or YAML file.

    Args:
        path: Path to a .json, .yaml or .yml file.

    Returns:
        TemplateServiceConfig with file values applied over env defaults.

    Raises:
        ConfigError: If the file is missing, unparseable or not a mapping.
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise ConfigError(f"Config file not found: {file_path}")

    content = file_path.read_text(encoding='utf-8')

    try:
        if file_path.suffix in ('.yaml', '.yml'):
            data = yaml.safe_load(content)
        else:
            data = json.loads(content)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigError(f"Invalid config file {file_path}: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file must contain a mapping: {file_path}")

    logger.debug("Loaded config from %s", file_path)
    return TemplateServiceConfig.from_dict(data)
