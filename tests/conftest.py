import os
import stat
import sys
from pathlib import Path

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

posix_only = pytest.mark.skipif(os.name != "posix", reason="needs POSIX shell scripts")


@pytest.fixture
def make_script(tmp_path):
    """Write a script into tmp_path/scripts and return its Path."""
    scripts = tmp_path / "scripts"
    scripts.mkdir(exist_ok=True)

    def _make(name: str, body: str = "#!/bin/sh\nexit 0\n", executable: bool = True) -> Path:
        p = scripts / name
        p.write_text(body, encoding="utf-8")
        if executable:
            p.chmod(p.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return p

    return _make


@pytest.fixture
def scripts_dir(tmp_path):
    d = tmp_path / "scripts"
    d.mkdir(exist_ok=True)
    return d
