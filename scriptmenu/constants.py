#===============================================================================
#  ScriptMenu | constants.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-19
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Central place for the app name, well-known file locations and icon naming.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

from pathlib import Path

APP_NAME = "scriptmenu"
APP_TITLE = "Script Menu"

SETTINGS_DIR = Path.home() / ".config" / APP_NAME
SETTINGS_FILE_NAME = "settings.json"
LOG_FILE_PATH = Path.home() / f".{APP_NAME}.log"

# --- Icons (freedesktop icon-theme names) ---
TRAY_ICON = "utilities-terminal-symbolic"
DEFAULT_SCRIPT_ICON = "utilities-terminal-symbolic"
GENERIC_SCRIPT_ICON = "text-x-script"

# Interpreter (version digits stripped) -> icon name
ICON_BY_INTERPRETER = {
    "sh": "utilities-terminal",
    "bash": "utilities-terminal",
    "zsh": "utilities-terminal",
    "fish": "utilities-terminal",
    "dash": "utilities-terminal",
    "python": "text-x-python",
    "perl": "text-x-perl",
    "ruby": "text-x-ruby",
    "node": "text-x-javascript",
    "lua": "text-x-lua",
    "php": "application-x-php",
}

# Bytes read from a script when looking for a shebang line
SHEBANG_READ_LIMIT = 256

# Output shown per stream in a full-output notification
NOTIFY_OUTPUT_LIMIT = 400
