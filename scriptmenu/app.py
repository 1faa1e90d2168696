#===============================================================================
#  ScriptMenu | app.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-19
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Application entry point: logging, settings, service lifecycle, tray.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import argparse
import locale
import logging
import sys
from pathlib import Path
from typing import List, Optional

from PySide6.QtWidgets import QApplication, QSystemTrayIcon

from .constants import APP_NAME, APP_TITLE
from .log_sink import LogSink
from .service import ScriptMenuService
from .state import default_settings_path, load_settings
from .tray import TrayApp, TrayNotifier

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog=APP_NAME, description=APP_TITLE)
    parser.add_argument(
        "--settings",
        type=Path,
        default=default_settings_path(),
        help="settings file (default: %(default)s)",
    )
    parser.add_argument("--verbose", action="store_true", help="debug logging")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # menu sorting follows the user's collation order
    try:
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error as e:
        logger.warning("Using default collation: %s", e)

    app = QApplication(sys.argv[:1])
    app.setApplicationName(APP_TITLE)
    app.setQuitOnLastWindowClosed(False)

    if not QSystemTrayIcon.isSystemTrayAvailable():
        logger.error("No system tray available on this desktop.")
        return 1

    settings = load_settings(args.settings)
    service = ScriptMenuService(settings, notifier=TrayNotifier(), log_sink=LogSink())
    app.aboutToQuit.connect(service.close)

    tray = TrayApp(service, args.settings)
    tray.show()
    logger.info("Watching scripts in %s", settings.directory or "(not configured)")

    try:
        return app.exec()
    finally:
        service.close()
