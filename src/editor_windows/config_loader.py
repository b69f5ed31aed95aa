"""TOML configuration loading."""

from __future__ import annotations

import copy
import re
import time
import tomllib
from pathlib import Path

from loguru import logger

from editor_windows.editor_registry import DEFAULT_REGISTRY, EditorRegistry
from editor_windows.errors import EditorWindowsError, Error, ErrorType, Result

# =============================================================================
# Configuration
# =============================================================================

CONFIG_DIR = Path("~/.config/editor-windows").expanduser()
CONFIG_PATH = CONFIG_DIR / "config.toml"

# Default configuration - works without any user config file
DEFAULT_CONFIG = {
    "logging": {
        "level": "INFO",
        "file": True,
    },
    "editors": {
        "extra_applications": [],
        "extra_paths": {},
    },
    "window_server": {
        "normal_layer_only": True,  # drop menu-bar and overlay windows
    },
}


def toml_error_context(error: tomllib.TOMLDecodeError) -> dict:
    """
    Line number and a one-line message for a TOML parse error.

    tomllib reports positions as "(at line 3, column 8)" inside the message.

    Returns:
        Dict with line_number (None if absent) and formatted_message
    """
    error_str = str(error)
    line_match = re.search(r'line\s+(\d+)', error_str)
    line_number = int(line_match.group(1)) if line_match else None

    if line_number:
        formatted = f"Invalid TOML on line {line_number}: {error_str}"
    else:
        formatted = f"Invalid TOML: {error_str}"
    return {"line_number": line_number, "formatted_message": formatted}


def deep_merge(base: dict, override: dict) -> dict:
    """Merge override into base, recursing where both sides are tables."""
    merged = dict(base)
    for key, value in override.items():
        if isinstance(merged.get(key), dict) and isinstance(value, dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


# =============================================================================
# Validation
# =============================================================================


def editor_problems(editors: object) -> list[str]:
    """Shape errors in the [editors] table."""
    if not isinstance(editors, dict):
        return ["[editors] must be a table"]

    problems = []
    applications = editors.get("extra_applications", [])
    if not isinstance(applications, list) or not all(isinstance(a, str) for a in applications):
        problems.append("editors.extra_applications must be a list of strings")

    paths = editors.get("extra_paths", {})
    if not isinstance(paths, dict) or not all(
        isinstance(name, str) and isinstance(path, str) for name, path in paths.items()
    ):
        problems.append("editors.extra_paths must map editor names to path strings")
    return problems


def validate_config(config: dict) -> Result[dict]:
    """
    Check value types after merging, before anything consumes them.

    Args:
        config: Merged configuration

    Returns:
        Result[dict]: Ok with the config, or Err(VALIDATION_ERROR) listing
        every problem found
    """
    problems = [
        f"[{section}] must be a table"
        for section in ("logging", "window_server")
        if not isinstance(config.get(section), dict)
    ]

    if isinstance(config.get("logging"), dict):
        level = config["logging"].get("level")
        if not isinstance(level, str):
            problems.append("logging.level must be a string")
        else:
            try:
                logger.level(level.upper())
            except ValueError:
                problems.append(f"logging.level {level!r} is not a known log level")
        if not isinstance(config["logging"].get("file"), bool):
            problems.append("logging.file must be true or false")

    if isinstance(config.get("window_server"), dict):
        if not isinstance(config["window_server"].get("normal_layer_only"), bool):
            problems.append("window_server.normal_layer_only must be true or false")

    problems.extend(editor_problems(config.get("editors")))

    if problems:
        return Result.err(Error(
            error_type=ErrorType.VALIDATION_ERROR,
            message="; ".join(problems),
            context={"problems": problems}
        ))
    return Result.ok(config)


def load_config(config_path: Path = CONFIG_PATH) -> Result[dict]:
    """
    Load configuration from a TOML file with defaults fallback.

    A missing file is not an error: the defaults are returned.

    Args:
        config_path: Path to the TOML config file

    Returns:
        Result[dict]: Ok with merged config, or Err with error details
    """
    start_time = time.perf_counter()

    if not config_path.exists():
        logger.debug(
            "Config file does not exist, using defaults",
            operation="load_config",
            status="default",
            config_path=str(config_path)
        )
        return Result.ok(copy.deepcopy(DEFAULT_CONFIG))

    try:
        with open(config_path, "rb") as f:
            user_config = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        error_context = toml_error_context(e)
        logger.error(
            "Invalid TOML syntax in configuration file",
            operation="load_config",
            status="failed",
            file=str(config_path),
            line_number=error_context["line_number"],
            error=error_context["formatted_message"]
        )
        return Result.err(Error(
            error_type=ErrorType.PARSE_ERROR,
            message=error_context["formatted_message"],
            context={"config_path": str(config_path), "line_number": error_context["line_number"]},
            original_exception=e
        ))
    except OSError as e:
        logger.error(
            "Config file could not be read",
            operation="load_config",
            status="failed",
            file=str(config_path),
            error=str(e)
        )
        return Result.err(Error(
            error_type=ErrorType.FILE_NOT_FOUND,
            message=f"Config file could not be read: {config_path}",
            context={"config_path": str(config_path)},
            original_exception=e
        ))

    merged = deep_merge(copy.deepcopy(DEFAULT_CONFIG), user_config)
    validation = validate_config(merged)
    if validation.is_err():
        logger.error(
            "Configuration values have the wrong type",
            operation="load_config",
            status="failed",
            file=str(config_path),
            problems=validation.error.context["problems"]
        )
        validation.error.context["config_path"] = str(config_path)
        return validation

    duration_ms = int((time.perf_counter() - start_time) * 1000)

    logger.debug(
        "Config loaded successfully",
        operation="load_config",
        status="success",
        config_path=str(config_path),
        metrics={
            "extra_applications": len(merged["editors"].get("extra_applications", [])),
            "duration_ms": duration_ms
        }
    )
    return Result.ok(merged)


def registry_from_config(config: dict) -> EditorRegistry:
    """
    Build the editor registry for a pass, extended by the user's config.

    Raises:
        EditorWindowsError: The [editors] table has the wrong shape.
    """
    editors = config.get("editors", {})
    problems = editor_problems(editors)
    if problems:
        raise EditorWindowsError(f"Invalid configuration: {'; '.join(problems)}")

    extra_applications = editors.get("extra_applications") or []
    extra_paths = editors.get("extra_paths") or {}

    if not extra_applications and not extra_paths:
        return DEFAULT_REGISTRY

    logger.debug(
        "Extending editor registry from config",
        operation="registry_from_config",
        extra_applications=list(extra_applications),
        extra_paths=sorted(extra_paths)
    )
    return DEFAULT_REGISTRY.extended(applications=extra_applications, paths=extra_paths)
