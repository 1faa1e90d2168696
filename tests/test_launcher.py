import os
import signal
import threading
import time

import pytest

from scriptmenu.launcher import ProcessLauncher
from scriptmenu.models import LaunchResult

from conftest import posix_only

pytestmark = posix_only

WAIT = 10


class _Collector:
    """Completion handler that records every call."""

    def __init__(self):
        self.results = []
        self.calls = 0
        self.done = threading.Event()
        self._lock = threading.Lock()

    def __call__(self, result: LaunchResult):
        with self._lock:
            self.calls += 1
            self.results.append(result)
        self.done.set()

    def result(self) -> LaunchResult:
        assert self.done.wait(WAIT), "completion handler never called"
        return self.results[0]


@pytest.fixture
def launcher():
    with ProcessLauncher() as launcher:
        yield launcher


def test_success_captures_stdout(launcher, make_script):
    p = make_script("hello.sh", "#!/bin/sh\necho hello\n")
    cb = _Collector()

    launcher.launch(str(p), cb)
    r = cb.result()

    assert r == LaunchResult(exit_status=0, stdout="hello\n", stderr="")
    assert r.succeeded
    assert r.spawn_error is None


def test_nonzero_exit_is_reported_not_raised(launcher, make_script):
    p = make_script("fail.sh", "#!/bin/sh\necho oops >&2\nexit 3\n")
    cb = _Collector()

    launcher.launch(str(p), cb)
    r = cb.result()

    assert not r.succeeded
    assert r.exit_status == 3
    assert r.stderr == "oops\n"


def test_missing_path_is_a_spawn_error(launcher, tmp_path):
    cb = _Collector()

    handle = launcher.launch(str(tmp_path / "nope.sh"), cb)

    # spawn failures are delivered before launch() returns
    assert cb.done.is_set()
    r = cb.result()
    assert r.spawn_error
    assert r.exit_status is None
    assert not r.succeeded
    assert handle.pid is None
    assert handle.wait(0) is r


def test_non_executable_file_is_a_spawn_error(launcher, make_script):
    p = make_script("plain.sh", "#!/bin/sh\necho hi\n", executable=False)
    cb = _Collector()

    launcher.launch(str(p), cb)
    r = cb.result()

    assert r.spawn_error
    assert not r.succeeded


def test_file_removed_after_scan_is_a_spawn_error(launcher, make_script):
    p = make_script("gone.sh")
    p.unlink()
    cb = _Collector()

    launcher.launch(str(p), cb)

    assert cb.result().spawn_error


def test_signal_termination_is_not_success(launcher, make_script):
    p = make_script("killed.sh", "#!/bin/sh\nkill -KILL $$\n")
    cb = _Collector()

    launcher.launch(str(p), cb)
    r = cb.result()

    assert not r.succeeded
    assert r.exit_status is None
    assert r.signal == signal.SIGKILL
    assert r.spawn_error is None


def test_stdin_is_empty(launcher, make_script):
    p = make_script("cat.sh", "#!/bin/sh\ncat\necho done\n")
    cb = _Collector()

    launcher.launch(str(p), cb)

    assert cb.result().stdout == "done\n"


def test_runs_in_script_directory(launcher, make_script):
    p = make_script("where.sh", "#!/bin/sh\npwd -P\n")
    cb = _Collector()

    launcher.launch(str(p), cb)

    assert cb.result().stdout.strip() == os.path.realpath(p.parent)


def test_undecodable_output_is_replaced(launcher, make_script):
    p = make_script("bytes.sh", "#!/bin/sh\nprintf 'a\\377b'\n")
    cb = _Collector()

    launcher.launch(str(p), cb)

    assert cb.result().stdout == "a�b"


def test_line_endings_are_kept_verbatim(launcher, make_script):
    p = make_script("crlf.sh", "#!/bin/sh\nprintf 'a\\r\\nb\\rc'\nprintf 'x\\r\\n' >&2\n")
    cb = _Collector()

    launcher.launch(str(p), cb)
    r = cb.result()

    assert r.stdout == "a\r\nb\rc"
    assert r.stderr == "x\r\n"


def test_launch_does_not_block(launcher, make_script):
    p = make_script("slow.sh", "#!/bin/sh\nsleep 1\necho late\n")
    cb = _Collector()

    started = time.monotonic()
    handle = launcher.launch(str(p), cb)
    elapsed = time.monotonic() - started

    assert elapsed < 0.8
    assert handle.running
    assert not cb.done.is_set()
    assert cb.result().stdout == "late\n"
    assert handle.wait(WAIT) is not None
    assert not handle.running


def test_concurrent_launches_are_isolated(launcher, make_script):
    a = make_script("a.sh", "#!/bin/sh\nfor i in 1 2 3 4 5; do echo A$i; echo a$i >&2; sleep 0.05; done\n")
    b = make_script("b.sh", "#!/bin/sh\nfor i in 1 2 3 4 5; do echo B$i; echo b$i >&2; sleep 0.05; done\n")
    cb_a, cb_b = _Collector(), _Collector()

    launcher.launch(str(a), cb_a)
    launcher.launch(str(b), cb_b)
    ra, rb = cb_a.result(), cb_b.result()

    assert ra.stdout == "".join(f"A{i}\n" for i in range(1, 6))
    assert ra.stderr == "".join(f"a{i}\n" for i in range(1, 6))
    assert rb.stdout == "".join(f"B{i}\n" for i in range(1, 6))
    assert rb.stderr == "".join(f"b{i}\n" for i in range(1, 6))


def test_second_launch_does_not_wait_for_first(launcher, make_script):
    slow = make_script("slow.sh", "#!/bin/sh\nsleep 2\n")
    fast = make_script("fast.sh", "#!/bin/sh\necho quick\n")
    cb_slow, cb_fast = _Collector(), _Collector()

    launcher.launch(str(slow), cb_slow)
    launcher.launch(str(fast), cb_fast)

    assert cb_fast.result().stdout == "quick\n"
    assert not cb_slow.done.is_set()
    assert cb_slow.result().succeeded


def test_handler_called_exactly_once(launcher, make_script):
    p = make_script("once.sh")
    cb = _Collector()

    handle = launcher.launch(str(p), cb)
    handle.wait(WAIT)
    time.sleep(0.1)

    assert cb.calls == 1


def test_handler_errors_are_logged_not_raised(launcher, make_script, tmp_path, caplog):
    def _bad(result):
        raise ValueError("handler bug")

    handle = launcher.launch(str(tmp_path / "missing"), _bad)
    assert handle.result.spawn_error

    p = make_script("ok.sh")
    handle = launcher.launch(str(p), _bad)
    assert handle.wait(WAIT).succeeded
    assert "Completion handler" in caplog.text


def test_cancel_kills_running_child(launcher, make_script):
    p = make_script("forever.sh", "#!/bin/sh\nexec sleep 30\n")
    cb = _Collector()

    handle = launcher.launch(str(p), cb)
    assert handle.cancel()
    r = cb.result()

    assert r.signal == signal.SIGKILL
    assert not r.succeeded
    handle.wait(WAIT)
    assert not handle.cancel()


def test_closed_launcher_rejects_launches(make_script):
    launcher = ProcessLauncher()
    launcher.close()

    with pytest.raises(RuntimeError):
        launcher.launch(str(make_script("x.sh")), lambda r: None)


def test_close_leaves_children_running_by_default(make_script):
    p = make_script("slow.sh", "#!/bin/sh\nsleep 0.3\necho finished\n")
    cb = _Collector()
    launcher = ProcessLauncher()

    launcher.launch(str(p), cb)
    launcher.close()

    assert cb.result().stdout == "finished\n"


def test_close_can_kill_running_children(make_script):
    p = make_script("forever.sh", "#!/bin/sh\nexec sleep 30\n")
    cb = _Collector()
    launcher = ProcessLauncher()

    launcher.launch(str(p), cb)
    launcher.close(kill_running=True)

    assert cb.result().signal == signal.SIGKILL
    assert launcher.active == []


def test_cancel_kills_commands_started_by_the_script(launcher, make_script):
    p = make_script("nested.sh", "#!/bin/sh\nsleep 30\necho never\n")
    cb = _Collector()

    handle = launcher.launch(str(p), cb)
    time.sleep(0.2)
    started = time.monotonic()
    assert handle.cancel()
    r = cb.result()

    assert time.monotonic() - started < 3
    assert r.signal == signal.SIGKILL
    assert r.stdout == ""


def test_close_kills_commands_started_by_the_script(make_script):
    p = make_script("nested.sh", "#!/bin/sh\nsleep 30\n")
    cb = _Collector()
    launcher = ProcessLauncher()

    handle = launcher.launch(str(p), cb)
    time.sleep(0.2)
    started = time.monotonic()
    launcher.close(kill_running=True)

    assert handle.wait(WAIT) is not None
    assert time.monotonic() - started < 3
    assert cb.result().signal == signal.SIGKILL
