"""
editor-windows - list editor windows grouped by project

Usage:
    editor-windows                       # resolve windows on this desktop
    editor-windows --pretty              # indented JSON
    editor-windows --debug               # verbose JSONL logs on stderr
    editor-windows --no-file-log         # skip the rotating log file
    editor-windows --title "a — b" ...   # parse titles only, no OS access

Output is a JSON envelope on stdout:
    {"success": bool, "data": ..., "error": str | null,
     "execution_time_ms": int, "timestamp": str}

Logs: JSONL on stderr, plus ~/Library/Logs/editor-windows/resolver.jsonl
Config: ~/.config/editor-windows/config.toml
"""

from __future__ import annotations

import json
import sys
import time
from datetime import datetime, timezone
from typing import Any, Callable

from loguru import logger

from editor_windows.config_loader import CONFIG_PATH, load_config, registry_from_config
from editor_windows.errors import EditorWindowsError
from editor_windows.logging_config import setup_logger
from editor_windows.resolver import resolve_windows
from editor_windows.title_parser import parse_title

# =============================================================================
# Command Envelope
# =============================================================================


def run_command(command_name: str, handler: Callable[[], Any]) -> dict:
    """
    Run a command with timing and logging, returning the response envelope.

    Only EditorWindowsError is turned into a failed envelope; anything else
    is a bug and propagates.

    Args:
        command_name: Name used in logs.
        handler: Zero-argument callable producing JSON-serializable data.

    Returns:
        Envelope dict with success, data, error, execution_time_ms, timestamp.
    """
    start_time = time.perf_counter()
    logger.info(
        "Command started",
        operation=command_name,
        status="started"
    )

    data = None
    error = None
    try:
        data = handler()
    except EditorWindowsError as e:
        error = str(e)

    execution_time_ms = int((time.perf_counter() - start_time) * 1000)

    if error is None:
        logger.info(
            "Command completed successfully",
            operation=command_name,
            status="success",
            metrics={"duration_ms": execution_time_ms}
        )
    else:
        logger.error(
            "Command failed",
            operation=command_name,
            status="failed",
            error=error,
            metrics={"duration_ms": execution_time_ms}
        )

    return {
        "success": error is None,
        "data": data,
        "error": error,
        "execution_time_ms": execution_time_ms,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


# =============================================================================
# Commands
# =============================================================================


def list_editor_windows(config: dict) -> list[dict]:
    try:
        from editor_windows.macos import MacAccessibilityService, MacWindowSnapshotService
    except ImportError as e:
        raise EditorWindowsError(
            f"macOS bindings unavailable (install pyobjc on macOS): {e}"
        ) from e

    snapshot_service = MacWindowSnapshotService(
        normal_layer_only=config["window_server"].get("normal_layer_only", True)
    )
    windows = resolve_windows(
        snapshot_service,
        MacAccessibilityService(),
        registry=registry_from_config(config),
    )
    return [window.to_dict() for window in windows]


def parse_titles(titles: list[str]) -> list[dict]:
    results = []
    for title in titles:
        identity = parse_title(title)
        results.append({"title": title, "project": identity.project, "tab": identity.tab})
    return results


FLAGS = ("--pretty", "--debug", "--no-file-log", "--title")


def _titles_from_argv(argv: list[str]) -> list[str] | None:
    if "--title" not in argv:
        return None
    return [arg for arg in argv[argv.index("--title") + 1:] if arg not in FLAGS]


def main(argv: list[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    pretty = "--pretty" in argv
    debug = "--debug" in argv
    file_logging = "--no-file-log" not in argv
    titles = _titles_from_argv(argv)

    setup_logger(level="DEBUG" if debug else "INFO", file_logging=file_logging)

    config_result = load_config(CONFIG_PATH)
    config = config_result.value if config_result.is_ok() else None
    if config is not None and not debug:
        logging_config = config["logging"]
        setup_logger(
            level=logging_config.get("level", "INFO"),
            file_logging=file_logging and logging_config.get("file", True)
        )

    if titles is not None:
        envelope = run_command("parse_titles", lambda: parse_titles(titles))
    elif config is None:
        envelope = run_command("list_editor_windows", lambda: _raise_config_error(config_result))
    else:
        envelope = run_command("list_editor_windows", lambda: list_editor_windows(config))

    sys.stdout.write(json.dumps(envelope, indent=2 if pretty else None, ensure_ascii=False) + "\n")
    return 0 if envelope["success"] else 1


def _raise_config_error(config_result):
    raise EditorWindowsError(f"Invalid configuration: {config_result.error.message}")


if __name__ == "__main__":
    sys.exit(main())
