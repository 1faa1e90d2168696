#===============================================================================
#  ScriptMenu | fs_discovery.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-19
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Filesystem discovery of launchable scripts in the configured directory,
#  plus the shebang-based icon heuristic.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import locale
import logging
import os
import re
from pathlib import Path
from typing import List, Optional, Union

from .constants import (
    DEFAULT_SCRIPT_ICON,
    GENERIC_SCRIPT_ICON,
    ICON_BY_INTERPRETER,
    SHEBANG_READ_LIMIT,
)
from .models import IconMode, ScriptEntry

logger = logging.getLogger(__name__)

_VERSION_SUFFIX_RE = re.compile(r"[\d.]+$")


def display_name_for(name: str, strip_extensions: bool) -> str:
    """Presentation name for a script file.

    With stripping on, "backup.sh" -> "backup"; names without an extension
    and dotfiles (".env") are returned unchanged.
    """
    if not strip_extensions:
        return name
    stem, _ext = os.path.splitext(name)
    return stem or name


def read_interpreter(path: Path) -> Optional[str]:
    """Return the interpreter named by a script's shebang line, or None.

    "#!/bin/bash" -> "bash", "#!/usr/bin/env -S python3 -u" -> "python3".
    Binary and unreadable files yield None.
    """
    try:
        with open(path, "rb") as f:
            head = f.read(SHEBANG_READ_LIMIT)
    except OSError:
        return None

    if not head.startswith(b"#!"):
        return None
    try:
        line = head[2:].splitlines()[0].decode("utf-8") if head[2:] else ""
    except UnicodeDecodeError:
        return None

    tokens = line.split()
    if not tokens:
        return None

    prog = os.path.basename(tokens[0])
    if prog == "env":
        args = [t for t in tokens[1:] if not t.startswith("-") and "=" not in t]
        if not args:
            return None
        prog = os.path.basename(args[0])
    return prog or None


def sniff_icon_hint(path: Path, default_icon: str = DEFAULT_SCRIPT_ICON) -> str:
    """Best-effort icon token for a script; falls back to default_icon."""
    interpreter = read_interpreter(path)
    if not interpreter:
        return default_icon
    family = _VERSION_SUFFIX_RE.sub("", interpreter) or interpreter
    return ICON_BY_INTERPRETER.get(family, GENERIC_SCRIPT_ICON)


def _sort_key(name: str):
    return (locale.strxfrm(name), name)


def scan_scripts_folder(
    scripts_dir: Union[str, Path, None],
    icon_mode: IconMode = IconMode.SHEBANG,
    default_icon: str = DEFAULT_SCRIPT_ICON,
    strip_extensions: bool = False,
) -> List[ScriptEntry]:
    """Scan the scripts directory and return launchable entries, sorted by name.

    Rules:
    - Missing/unset/non-directory path -> empty list (never raises)
    - Only regular files at the top level (symlinks to files count)
    - Subdirectories, sockets, FIFOs and dangling links are skipped
    """
    if not scripts_dir:
        return []

    folder = Path(scripts_dir).expanduser()
    try:
        if not folder.is_dir():
            return []
    except OSError:
        return []
    folder = Path(os.path.abspath(folder))

    try:
        items = list(folder.iterdir())
    except OSError as e:
        logger.warning("Cannot list scripts directory %s: %s", folder, e)
        return []

    entries: List[ScriptEntry] = []
    for item in sorted(items, key=lambda p: _sort_key(p.name)):
        try:
            if not item.is_file():
                continue
        except OSError:
            continue

        if icon_mode == IconMode.SHEBANG:
            icon_hint = sniff_icon_hint(item, default_icon)
        else:
            icon_hint = default_icon

        entries.append(
            ScriptEntry(
                name=item.name,
                path=str(folder / item.name),
                display_name=display_name_for(item.name, strip_extensions),
                icon_hint=icon_hint,
            )
        )

    return entries
