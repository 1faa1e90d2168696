#===============================================================================
#  ScriptMenu | state.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-19
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Load/save of the user settings file (scripts directory, notify mode,
#  logging, icon source, extension stripping).
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

from .constants import DEFAULT_SCRIPT_ICON, SETTINGS_DIR, SETTINGS_FILE_NAME
from .models import IconMode, NotifyMode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    """Read-only configuration handed to the launcher service."""
    directory: str = ""
    notify_mode: NotifyMode = NotifyMode.EXIT_CODE_ONLY
    logging: bool = False
    icon_mode: IconMode = IconMode.SHEBANG
    default_icon: str = DEFAULT_SCRIPT_ICON
    strip_extensions: bool = False


def default_settings_path() -> Path:
    return SETTINGS_DIR / SETTINGS_FILE_NAME


def default_state() -> Dict[str, Any]:
    return {
        "path": "",                       # directory with your scripts
        "notify": NotifyMode.EXIT_CODE_ONLY.value,
        "logging": False,
        "icon_mode": IconMode.SHEBANG.value,
        "default_icon": DEFAULT_SCRIPT_ICON,
        "strip_extensions": False,
    }


def _notify_mode(value: Any) -> NotifyMode:
    # Older files stored notify as a plain on/off switch
    if isinstance(value, bool):
        return NotifyMode.EXIT_CODE_ONLY if value else NotifyMode.OFF
    try:
        return NotifyMode(value)
    except ValueError:
        logger.warning("Unknown notify mode %r, using %s", value, NotifyMode.EXIT_CODE_ONLY.value)
        return NotifyMode.EXIT_CODE_ONLY


def _icon_mode(value: Any) -> IconMode:
    try:
        return IconMode(value)
    except ValueError:
        logger.warning("Unknown icon mode %r, using %s", value, IconMode.SHEBANG.value)
        return IconMode.SHEBANG


def _flag(key: str, value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    logger.warning("Setting %r must be true or false, got %r; using %s", key, value, str(default).lower())
    return default


def settings_from_state(state: Dict[str, Any]) -> Settings:
    """Build typed settings from a raw state dict (missing keys -> defaults)."""
    d = default_state()
    data = dict(d)
    data.update(state or {})
    if "logging" not in (state or {}) and "log" in (state or {}):
        data["logging"] = state["log"]

    return Settings(
        directory=str(data.get("path") or "").strip(),
        notify_mode=_notify_mode(data.get("notify")),
        logging=_flag("logging", data.get("logging"), d["logging"]),
        icon_mode=_icon_mode(data.get("icon_mode")),
        default_icon=str(data.get("default_icon") or d["default_icon"]),
        strip_extensions=_flag("strip_extensions", data.get("strip_extensions"), d["strip_extensions"]),
    )


def state_from_settings(settings: Settings) -> Dict[str, Any]:
    return {
        "path": settings.directory,
        "notify": settings.notify_mode.value,
        "logging": settings.logging,
        "icon_mode": settings.icon_mode.value,
        "default_icon": settings.default_icon,
        "strip_extensions": settings.strip_extensions,
    }


def load_settings(settings_path: Path) -> Settings:
    """Load settings from disk (or fall back to defaults)."""
    if not settings_path.exists():
        return settings_from_state({})
    try:
        data = json.loads(settings_path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning("Could not read settings %s (%s), using defaults", settings_path, e)
        return settings_from_state({})
    if not isinstance(data, dict):
        logger.warning("Settings %s is not a JSON object, using defaults", settings_path)
        return settings_from_state({})
    return settings_from_state(data)


def save_settings(settings_path: Path, settings: Settings) -> None:
    """Persist settings to disk."""
    settings_path.parent.mkdir(parents=True, exist_ok=True)
    settings_path.write_text(json.dumps(state_from_settings(settings), indent=2), encoding="utf-8")


def ensure_settings_file(settings_path: Path) -> Path:
    """Create the settings file with defaults if it does not exist yet."""
    if not settings_path.exists():
        save_settings(settings_path, settings_from_state({}))
    return settings_path
