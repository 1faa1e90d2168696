#===============================================================================
#  ScriptMenu | log_sink.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-19
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Appends script output to the run log (~/.scriptmenu.log by default).
#  Records are written whole, one writer at a time per file.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import os
import threading
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional, Union

from .constants import LOG_FILE_PATH

# One lock per log file, shared by every sink that points at it
_file_locks: Dict[str, threading.Lock] = {}
_file_locks_guard = threading.Lock()


def _lock_for(path: Path) -> threading.Lock:
    key = os.path.normcase(os.path.abspath(path))
    with _file_locks_guard:
        return _file_locks.setdefault(key, threading.Lock())


def _section(text: str) -> str:
    if text and not text.endswith("\n"):
        return text + "\n"
    return text


def format_log_record(script_name: str, timestamp: str, stdout: str, stderr: str) -> str:
    """Render one record: blank line, header, STDOUT block, STDERR block."""
    return (
        f"\n[{script_name}]: {timestamp}\n"
        f"STDOUT:\n{_section(stdout)}"
        f"STDERR:\n{_section(stderr)}"
    )


class LogSink:
    def __init__(self, path: Union[str, Path, None] = None):
        self.path = Path(path) if path else LOG_FILE_PATH
        self._lock = _lock_for(self.path)

    def append(self, script_name: str, stdout: str, stderr: str, timestamp: Optional[str] = None) -> None:
        """Append a record for one finished script (raises OSError on I/O failure)."""
        if timestamp is None:
            timestamp = datetime.now().astimezone().strftime("%a %b %d %Y %H:%M:%S %Z")
        record = format_log_record(script_name, timestamp, stdout or "", stderr or "")

        with self._lock:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "a", encoding="utf-8", errors="replace") as f:
                f.write(record)
