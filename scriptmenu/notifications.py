#===============================================================================
#  ScriptMenu | notifications.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-19
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Completion-notification text and the notifier contract used by the service.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import signal as _signal
from typing import Optional, Protocol, Tuple

from .constants import NOTIFY_OUTPUT_LIMIT
from .models import LaunchResult, NotifyMode

MSG_SUCCESS = "Command execution complete!"
MSG_FAILURE = "Uh-oh, something went wrong!"


class Notifier(Protocol):
    def notify(self, script_name: str, result: LaunchResult, mode: NotifyMode) -> None:
        ...


def _signal_name(signum: int) -> str:
    try:
        return _signal.Signals(signum).name
    except ValueError:
        return f"signal {signum}"


def _trim(text: str, limit: int = NOTIFY_OUTPUT_LIMIT) -> str:
    text = (text or "").strip()
    if len(text) > limit:
        return text[:limit].rstrip() + "…"
    return text


def headline(result: LaunchResult) -> str:
    if result.spawn_error is not None:
        return f"Could not start: {result.spawn_error}"
    if result.signal is not None:
        return f"{MSG_FAILURE} (killed by {_signal_name(result.signal)})"
    if result.succeeded:
        return MSG_SUCCESS
    return f"{MSG_FAILURE} (exit status {result.exit_status})"


def format_notification(script_name: str, result: LaunchResult, mode: NotifyMode) -> Optional[Tuple[str, str]]:
    """Return (title, body) for a finished launch, or None when notifications are off."""
    if mode == NotifyMode.OFF:
        return None

    body = headline(result)
    if mode == NotifyMode.FULL_OUTPUT:
        out = _trim(result.stdout)
        err = _trim(result.stderr)
        if out:
            body += f"\n\nSTDOUT:\n{out}"
        if err:
            body += f"\n\nSTDERR:\n{err}"
    return script_name, body
