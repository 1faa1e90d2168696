#===============================================================================
#  ScriptMenu | service.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-19
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  The script-directory launcher service: scan the configured folder, launch
#  a selected entry and apply the configured side effects (notify, log) when
#  it finishes. Constructed with settings, disposed with close().
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import logging
from typing import Callable, List, Optional

from .fs_discovery import scan_scripts_folder
from .launcher import LaunchHandle, ProcessLauncher
from .log_sink import LogSink
from .models import LaunchResult, NotifyMode, ScriptEntry
from .notifications import Notifier
from .state import Settings

logger = logging.getLogger(__name__)


class ScriptMenuService:
    def __init__(
        self,
        settings: Settings,
        notifier: Optional[Notifier] = None,
        log_sink: Optional[LogSink] = None,
        launcher: Optional[ProcessLauncher] = None,
    ):
        self.settings = settings
        self.notifier = notifier
        self.log_sink = log_sink or LogSink()
        self.launcher = launcher or ProcessLauncher()

    @property
    def configured(self) -> bool:
        return bool(self.settings.directory)

    def update_settings(self, settings: Settings) -> None:
        self.settings = settings

    def entries(self) -> List[ScriptEntry]:
        """Fresh scan of the scripts directory (no caching)."""
        s = self.settings
        return scan_scripts_folder(
            s.directory,
            icon_mode=s.icon_mode,
            default_icon=s.default_icon,
            strip_extensions=s.strip_extensions,
        )

    def run(
        self,
        entry: ScriptEntry,
        on_complete: Optional[Callable[[ScriptEntry, LaunchResult], None]] = None,
    ) -> LaunchHandle:
        """Launch an entry; side effects use the settings current at launch time."""
        settings = self.settings
        logger.info("Launching %s", entry.path)

        def _done(result: LaunchResult) -> None:
            self._apply_side_effects(entry, result, settings)
            if on_complete is not None:
                on_complete(entry, result)

        return self.launcher.launch(entry.path, _done)

    def _apply_side_effects(self, entry: ScriptEntry, result: LaunchResult, settings: Settings) -> None:
        if result.succeeded:
            logger.info("%s finished successfully", entry.name)
        else:
            logger.info(
                "%s failed (exit=%s signal=%s spawn_error=%s)",
                entry.name, result.exit_status, result.signal, result.spawn_error,
            )

        if self.notifier is not None and settings.notify_mode != NotifyMode.OFF:
            try:
                self.notifier.notify(entry.name, result, settings.notify_mode)
            except Exception:
                logger.exception("Notification for %s failed", entry.name)

        if settings.logging:
            stderr = result.stderr
            if result.spawn_error is not None and not stderr:
                stderr = result.spawn_error
            try:
                self.log_sink.append(entry.name, result.stdout, stderr)
            except OSError as e:
                logger.error("Could not append %s output to %s: %s", entry.name, self.log_sink.path, e)

    def close(self) -> None:
        if not self.launcher.closed:
            logger.debug("Closing launcher service")
            self.launcher.close()

    def __enter__(self) -> "ScriptMenuService":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
