#===============================================================================
#  ScriptMenu  |  Script-Directory Launcher
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-19
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  A tray menu that lists the scripts placed in a configured folder and runs
#  the one you click as a detached child process.
#  Supports:
#    - Shebang-derived icons (or one fixed icon for every script)
#    - Optional extension stripping in menu labels (backup.sh -> backup)
#    - Completion notifications: off / exit code only / full output
#    - Optional run log at ~/.scriptmenu.log (STDOUT/STDERR per run)
#
#  Folder Conventions
#  ------------------
#    ~/.config/scriptmenu/settings.json  -> settings ("path" = scripts folder)
#    <scripts folder>/*                   -> every regular file is a menu item
#
#  Copyright & License Notes
#  -------------------------
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#
#  This source code is provided "AS IS", without warranty of any kind, express
#  or implied, including but not limited to the warranties of merchantability,
#  fitness for a particular purpose, and noninfringement.
#
#  Permission Notice (Personal/Internal Use)
#  -----------------------------------------
#  You may use, copy, and modify this software for personal or internal use.
#  Redistribution or public release should include this header and credit the
#  author. If you plan to open-source this project, consider replacing this
#  section with an OSI-approved license (e.g., MIT) for clarity.
#
#  Third-Party Components
#  ----------------------
#  This project uses third-party libraries (e.g., PySide6) which are licensed
#  separately by their respective authors. Ensure compliance with their
#  license terms when distributing this software.
#===============================================================================

import sys

from scriptmenu.app import main


if __name__ == "__main__":
    sys.exit(main())
