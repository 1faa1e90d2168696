#===============================================================================
#  ScriptMenu | tray.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-19
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  System-tray host for the launcher service:
#    - Menu rebuilt from the scripts folder every time it opens
#    - Click a script -> launch it (fire-and-forget)
#    - Completion messages shown as tray balloons (marshalled to GUI thread)
#    - Settings / Open scripts folder / Refresh / Quit actions
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import logging
import subprocess
import sys
from pathlib import Path
from typing import Optional

from PySide6.QtCore import QObject, Signal
from PySide6.QtGui import QAction, QIcon
from PySide6.QtWidgets import QApplication, QMenu, QSystemTrayIcon

from .constants import APP_TITLE, TRAY_ICON
from .models import LaunchResult, NotifyMode, ScriptEntry
from .notifications import format_notification
from .service import ScriptMenuService
from .state import ensure_settings_file, load_settings

logger = logging.getLogger(__name__)

MSG_NOT_CONFIGURED = "Specify the scripts directory in the settings"
MSG_NO_SCRIPTS = "No scripts found"


class TrayNotifier(QObject):
    """Notifier that may be called from any thread; the signal hops to the GUI thread."""

    message = Signal(str, str)

    def notify(self, script_name: str, result: LaunchResult, mode: NotifyMode) -> None:
        text = format_notification(script_name, result, mode)
        if text is None:
            return
        title, body = text
        self.message.emit(title, body)


class TrayApp(QObject):
    def __init__(self, service: ScriptMenuService, settings_path: Path, parent=None):
        super().__init__(parent)
        self.service = service
        self.settings_path = settings_path

        self.tray = QSystemTrayIcon(self._icon(TRAY_ICON), self)
        self.tray.setToolTip(APP_TITLE)

        self.menu = QMenu()
        self.menu.aboutToShow.connect(self.rebuild_menu)
        self.tray.setContextMenu(self.menu)

        if isinstance(service.notifier, TrayNotifier):
            service.notifier.message.connect(self.show_message)

        self.rebuild_menu()

    @staticmethod
    def _icon(name: Optional[str]) -> QIcon:
        return QIcon.fromTheme(name) if name else QIcon()

    def show(self) -> None:
        self.tray.show()

    # ----------------------------
    # Menu
    # ----------------------------
    def reload_settings(self) -> None:
        self.service.update_settings(load_settings(self.settings_path))

    def rebuild_menu(self) -> None:
        self.reload_settings()
        self.menu.clear()

        entries = self.service.entries()
        if not self.service.configured:
            act = QAction(MSG_NOT_CONFIGURED, self.menu)
            act.setEnabled(False)
            self.menu.addAction(act)
        elif not entries:
            act = QAction(MSG_NO_SCRIPTS, self.menu)
            act.setEnabled(False)
            self.menu.addAction(act)

        for entry in entries:
            act = QAction(self._icon(entry.icon_hint), entry.display_name, self.menu)
            act.setToolTip(entry.path)
            act.triggered.connect(lambda _checked=False, e=entry: self.launch_entry(e))
            self.menu.addAction(act)

        self.menu.addSeparator()

        act_refresh = QAction("Refresh", self.menu)
        act_refresh.triggered.connect(self.rebuild_menu)
        self.menu.addAction(act_refresh)

        act_folder = QAction("Open scripts folder", self.menu)
        act_folder.setEnabled(self.service.configured)
        act_folder.triggered.connect(self.open_scripts_folder)
        self.menu.addAction(act_folder)

        act_settings = QAction("Settings…", self.menu)
        act_settings.triggered.connect(self.open_settings)
        self.menu.addAction(act_settings)

        self.menu.addSeparator()

        act_quit = QAction("Quit", self.menu)
        act_quit.triggered.connect(QApplication.quit)
        self.menu.addAction(act_quit)

    def script_actions(self) -> list:
        """Actions that launch scripts (everything before the first separator)."""
        out = []
        for act in self.menu.actions():
            if act.isSeparator():
                break
            if act.isEnabled():
                out.append(act)
        return out

    # ----------------------------
    # Actions
    # ----------------------------
    def launch_entry(self, entry: ScriptEntry) -> None:
        self.service.run(entry)

    def show_message(self, title: str, body: str) -> None:
        self.tray.showMessage(title, body, self._icon(TRAY_ICON))

    def open_settings(self) -> None:
        ensure_settings_file(self.settings_path)
        self.open_path(self.settings_path)

    def open_scripts_folder(self) -> None:
        if self.service.configured:
            self.open_path(Path(self.service.settings.directory).expanduser())

    def open_path(self, target: Path) -> None:
        try:
            if sys.platform.startswith("win"):
                subprocess.Popen(["explorer", str(target)])
            elif sys.platform == "darwin":
                subprocess.Popen(["open", str(target)])
            else:
                subprocess.Popen(["xdg-open", str(target)])
        except OSError as e:
            logger.warning("Open failed for %s: %s", target, e)
            self.show_message(APP_TITLE, f"Open failed: {e}")
