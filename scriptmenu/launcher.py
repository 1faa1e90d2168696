#===============================================================================
#  ScriptMenu | launcher.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-19
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Launches scripts as detached child processes with captured stdout/stderr.
#  Each launch is awaited on its own worker thread; the outcome is delivered
#  once to a completion callback as a LaunchResult (spawn failures included).
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import logging
import os
import signal
import subprocess
import threading
from pathlib import Path
from typing import Callable, List, Optional, Set

from .models import LaunchResult

logger = logging.getLogger(__name__)

CompletionHandler = Callable[[LaunchResult], None]


class LaunchHandle:
    """Tracks one launch. Cancelling is opt-in; nothing cancels implicitly."""

    def __init__(self, path: str):
        self.path = path
        self._proc: Optional[subprocess.Popen] = None
        self._result: Optional[LaunchResult] = None
        self._done = threading.Event()

    @property
    def pid(self) -> Optional[int]:
        return self._proc.pid if self._proc is not None else None

    @property
    def running(self) -> bool:
        return self._proc is not None and not self._done.is_set()

    @property
    def result(self) -> Optional[LaunchResult]:
        return self._result

    def wait(self, timeout: Optional[float] = None) -> Optional[LaunchResult]:
        """Block until the completion handler has run; None on timeout."""
        self._done.wait(timeout)
        return self._result

    def cancel(self) -> bool:
        """Kill the child if it is still running. Returns True if a kill was sent."""
        if not self.running:
            return False
        logger.info("Cancelling %s (pid %s)", self.path, self.pid)
        if os.name == "posix":
            # the child leads its own session; take its whole group down
            try:
                os.killpg(self._proc.pid, signal.SIGKILL)
            except ProcessLookupError:
                return False
        else:
            self._proc.kill()
        return True

    def _finish(self, result: LaunchResult) -> None:
        self._result = result
        self._done.set()


class ProcessLauncher:
    """Fire-and-forget script launcher.

    launch() never blocks on the child and never raises for spawn failures:
    "not found", "permission denied" and "exec format error" come back as
    LaunchResult.spawn_error through the completion handler.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._active: Set[LaunchHandle] = set()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def active(self) -> List[LaunchHandle]:
        with self._lock:
            return list(self._active)

    def launch(self, path: str, on_complete: CompletionHandler) -> LaunchHandle:
        if self._closed:
            raise RuntimeError("Launcher is closed.")

        handle = LaunchHandle(str(path))
        try:
            proc = subprocess.Popen(
                [str(path)],
                cwd=str(Path(path).parent),
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                start_new_session=(os.name == "posix"),
            )
        except (OSError, ValueError) as e:
            logger.info("Could not start %s: %s", path, e)
            result = LaunchResult.from_spawn_error(str(e))
            self._deliver(handle, on_complete, result)
            return handle

        handle._proc = proc
        with self._lock:
            self._active.add(handle)
        logger.debug("Started %s (pid %s)", path, proc.pid)

        t = threading.Thread(
            target=self._await_exit,
            args=(handle, proc, on_complete),
            name=f"launch-{proc.pid}",
            daemon=True,
        )
        t.start()
        return handle

    def _await_exit(self, handle: LaunchHandle, proc: subprocess.Popen, on_complete: CompletionHandler) -> None:
        try:
            stdout, stderr = proc.communicate()
        except OSError as e:
            logger.error("Lost output pipes of %s: %s", handle.path, e)
            proc.wait()
            stdout, stderr = b"", b""

        result = LaunchResult.from_returncode(
            proc.returncode,
            (stdout or b"").decode("utf-8", "replace"),
            (stderr or b"").decode("utf-8", "replace"),
        )
        logger.debug("%s finished: exit=%s signal=%s", handle.path, result.exit_status, result.signal)

        with self._lock:
            self._active.discard(handle)
        self._deliver(handle, on_complete, result)

    @staticmethod
    def _deliver(handle: LaunchHandle, on_complete: CompletionHandler, result: LaunchResult) -> None:
        try:
            on_complete(result)
        except Exception:
            logger.exception("Completion handler for %s failed", handle.path)
        finally:
            handle._finish(result)

    def close(self, kill_running: bool = False) -> None:
        """Stop accepting launches. Running children keep running unless kill_running."""
        self._closed = True
        if kill_running:
            for handle in self.active:
                handle.cancel()

    def __enter__(self) -> "ProcessLauncher":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
