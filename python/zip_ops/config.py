"""
Configuration management for the zip tool.
Simple YAML-based configuration with sensible defaults.
"""

import copy
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from colored_logger import get_colored_logger
from .errors import UsageError
from .name_transcoder import DEFAULT_ENCODING

logger = get_colored_logger(__name__)

ENV_PREFIX = "JIPPER_"
CONFIG_FILENAMES = ["jipper.yml", ".jipper.yml"]

DEFAULT_CONFIG = {
    "encoding": {
        "target": DEFAULT_ENCODING,
    },
    "exclusions": {
        # Added to the built-in .DS_Store / __MACOSX patterns
        "patterns": [],
    },
    "archive": {
        "compression_level": 6,
        "temp_dir": None,
        "verify": True,
    },
    "logging": {
        "level": "INFO",
    },
}


def find_config_file() -> Optional[Path]:
    """Look for a config file in the working directory, then the home directory."""
    candidates = [Path.cwd() / name for name in CONFIG_FILENAMES]
    candidates.append(Path.home() / ".jipper.yml")
    for path in candidates:
        if path.is_file():
            return path
    return None


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load configuration from YAML file with fallback to defaults.

    Args:
        config_path: Optional path to config file; must exist when given

    Returns:
        Configuration dictionary
    """
    if config_path:
        config_file = Path(config_path).expanduser()
        if not config_file.is_file():
            raise UsageError(f"Config file not found: {config_path}")
    else:
        config_file = find_config_file()

    config = copy.deepcopy(DEFAULT_CONFIG)

    if config_file is not None:
        try:
            with open(config_file, "r", encoding="utf-8") as f:
                user_config = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            if config_path:
                raise UsageError(f"Failed to load config from {config_file}: {e}") from e
            logger.warning("Failed to load config from %s: %s", config_file, e)
            user_config = {}

        if not isinstance(user_config, dict):
            raise UsageError(f"Config file {config_file} must contain a mapping")

        config = _deep_merge(config, user_config)
        logger.debug("Loaded config from %s", config_file)

    return _apply_env_overrides(config)


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def _apply_env_overrides(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Apply environment variable overrides to config.

    Environment variables follow pattern: JIPPER_<SECTION>_<KEY>=value
    Example: JIPPER_ARCHIVE_COMPRESSION_LEVEL=9
    """
    for env_key, env_value in os.environ.items():
        if not env_key.startswith(ENV_PREFIX):
            continue

        # The section is the first word; the key keeps its underscores
        parts = env_key[len(ENV_PREFIX) :].lower().split("_", 1)
        if len(parts) < 2 or not parts[1]:
            continue

        section, key = parts
        current = config.setdefault(section, {})
        if not isinstance(current, dict):
            continue
        current[key] = _convert_env_value(env_value)

    return config


def _convert_env_value(value: str) -> Any:
    if value.lower() in ("true", "yes", "on"):
        return True
    elif value.lower() in ("false", "no", "off"):
        return False

    try:
        return int(value)
    except ValueError:
        pass

    if "," in value:
        return [item.strip() for item in value.split(",") if item.strip()]

    return value


@dataclass
class ZipSettings:
    """Validated settings for one run."""

    encoding: str = DEFAULT_ENCODING
    exclude_patterns: List[str] = field(default_factory=list)
    compression_level: int = 6
    temp_dir: Optional[str] = None
    verify: bool = True
    # A level name or a numeric level
    log_level: Union[str, int] = "INFO"

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "ZipSettings":
        encoding = _section(config, "encoding").get("target") or DEFAULT_ENCODING
        archive = _section(config, "archive")

        patterns = _section(config, "exclusions").get("patterns") or []
        if isinstance(patterns, str):
            patterns = [patterns]

        level = archive.get("compression_level", 6)
        if isinstance(level, bool) or not isinstance(level, int) or not 0 <= level <= 9:
            raise UsageError(f"Compression level must be between 0 and 9, got {level!r}")

        return cls(
            encoding=str(encoding),
            exclude_patterns=[str(p) for p in patterns],
            compression_level=level,
            temp_dir=archive.get("temp_dir") or None,
            verify=bool(archive.get("verify", True)),
            log_level=_section(config, "logging").get("level", "INFO"),
        )


def _section(config: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = config.get(name)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise UsageError(f"Config section '{name}' must be a mapping")
    return section


def set_config_value(config: Dict[str, Any], section: str, key: str, value: Any) -> None:
    """Set ``config[section][key]``, creating an empty section when it is unset."""
    target = _section(config, section)
    target[key] = value
    config[section] = target
