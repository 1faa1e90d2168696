#===============================================================================
#  ScriptMenu | models.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-19
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Shared data models used across the launcher service and the tray host.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class NotifyMode(str, Enum):
    OFF = "off"
    EXIT_CODE_ONLY = "exit_code_only"
    FULL_OUTPUT = "full_output"


class IconMode(str, Enum):
    SHEBANG = "shebang"
    FIXED = "fixed"


@dataclass(frozen=True)
class ScriptEntry:
    """Represents a launchable script discovered in the scripts directory."""
    name: str                  # base name on disk (unique within one scan)
    path: str                  # absolute path: <directory>/<name>
    display_name: str          # name, optionally without its extension
    icon_hint: Optional[str]   # icon-theme token, never a loaded resource


@dataclass(frozen=True)
class LaunchResult:
    """Outcome of a single launch attempt.

    exit_status is None when the process never ran (spawn_error is set) or
    was killed by a signal (signal is set).
    """
    exit_status: Optional[int] = None
    stdout: str = ""
    stderr: str = ""
    spawn_error: Optional[str] = None
    signal: Optional[int] = None

    @property
    def succeeded(self) -> bool:
        return self.spawn_error is None and self.exit_status == 0

    @classmethod
    def from_spawn_error(cls, error: str) -> "LaunchResult":
        return cls(spawn_error=error)

    @classmethod
    def from_returncode(cls, returncode: int, stdout: str, stderr: str) -> "LaunchResult":
        # Popen reports death-by-signal as a negative return code (POSIX)
        if returncode < 0:
            return cls(exit_status=None, stdout=stdout, stderr=stderr, signal=-returncode)
        return cls(exit_status=returncode, stdout=stdout, stderr=stderr)
