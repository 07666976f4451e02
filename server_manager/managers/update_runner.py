"""
Update runner - executes the system update script as a child process.

The script is opaque to this service: it may upgrade packages, restart
containers or reboot daemons. The runner only launches it, waits for it and
reports what it printed.
"""
import logging
import os
import shlex
import signal
import subprocess
import threading
from dataclasses import dataclass, asdict, replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Dict, Any

from ..core.settings import ServerManagerSettings

logger = logging.getLogger(__name__)


class UpdateError(RuntimeError):
    """Raised when the update command cannot be spawned, times out or exits non-zero."""

    def __init__(self, message: str, exit_code: Optional[int] = None, stdout: str = "", stderr: str = ""):
        super().__init__(message)
        self.exit_code = exit_code
        self.stdout = stdout
        self.stderr = stderr


class UpdateInProgressError(RuntimeError):
    """Raised when an update is requested while another one is still running."""


@dataclass
class UpdateOutput:
    """Captured output of a successful run."""
    stdout: str
    stderr: str
    exit_code: int = 0


@dataclass
class UpdateRun:
    """Record of the most recent update run (in memory only)."""
    started_at: str
    finished_at: Optional[str] = None
    success: Optional[bool] = None
    exit_code: Optional[int] = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class UpdateRunner:
    """
    Runs the fixed update command with single-flight semantics.

    Responsibilities:
    - Build the command line (privilege escalation + script path)
    - Run it with shell semantics and capture stdout/stderr
    - Allow at most one run at a time (reject or queue the others)
    - Keep counters and the last run for /update/status and /metrics

    Does NOT:
    - Stream partial output
    - Retry or roll back a failed update
    - Cancel a running script (except via the optional timeout, which kills
      the script's whole process group; a sudo-elevated group cannot be
      killed by an unprivileged server, so the run then lasts until it exits)
    """

    def __init__(self,
                 update_script: str,
                 use_sudo: bool = True,
                 sudo_command: str = "sudo",
                 timeout: Optional[float] = None,
                 concurrency: str = "reject"):
        if concurrency not in ("reject", "queue"):
            raise ValueError(f"Unknown concurrency policy: {concurrency}")

        self.update_script = update_script
        self.use_sudo = use_sudo
        self.sudo_command = sudo_command
        self.timeout = timeout
        self.concurrency = concurrency

        self._lock = threading.Lock()
        self._state_lock = threading.Lock()
        self._last_run: Optional[UpdateRun] = None
        self._runs = {"success": 0, "failure": 0}

    @classmethod
    def from_settings(cls, settings: ServerManagerSettings) -> "UpdateRunner":
        return cls(
            update_script=settings.update_script,
            use_sudo=settings.use_sudo,
            sudo_command=settings.sudo_command,
            timeout=settings.update_timeout,
            concurrency=settings.update_concurrency,
        )

    @property
    def command(self) -> str:
        """Shell command line executed for an update."""
        script = shlex.quote(self.update_script)
        if self.use_sudo:
            return f"{self.sudo_command} {script}"
        return script

    @property
    def in_progress(self) -> bool:
        return self._lock.locked()

    @property
    def last_run(self) -> Optional[UpdateRun]:
        """Copy of the most recent run record, taken under the state lock."""
        with self._state_lock:
            if self._last_run is None:
                return None
            return replace(self._last_run)

    def run_counts(self) -> Dict[str, int]:
        with self._state_lock:
            return dict(self._runs)

    def check_configuration(self) -> None:
        """Log warnings about a configuration that is likely to fail at run time."""
        if not Path(self.update_script).exists():
            logger.warning(f"Update script {self.update_script} does not exist; updates will fail")
        if self.use_sudo:
            logger.warning(f"Update script runs with elevated privileges via '{self.sudo_command}'")

    def run(self) -> UpdateOutput:
        """
        Execute the update command and wait for it to exit.

        Returns:
            UpdateOutput with the captured stdout/stderr

        Raises:
            UpdateInProgressError: another run holds the lock (reject policy)
            UpdateError: spawn failure, timeout or non-zero exit
        """
        blocking = self.concurrency == "queue"
        if not self._lock.acquire(blocking=blocking):
            logger.warning("Update requested while another update is running; rejecting")
            raise UpdateInProgressError("An update is already running")

        try:
            run = UpdateRun(started_at=_now())
            with self._state_lock:
                self._last_run = run
            try:
                output = self._execute()
            except UpdateError as e:
                self._finish(run, success=False, exit_code=e.exit_code, error=str(e))
                raise
            self._finish(run, success=True, exit_code=output.exit_code)
            return output
        finally:
            self._lock.release()

    def _execute(self) -> UpdateOutput:
        command = self.command
        logger.info(f"Running update command: {command}")

        try:
            # Own session so a timeout can kill the script and everything it spawned
            proc = subprocess.Popen(
                command,
                shell=True,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                start_new_session=True,
            )
        except OSError as e:
            logger.error(f"Failed to start update command: {e}")
            raise UpdateError(f"Failed to start command: {command}: {e}") from e

        try:
            stdout, stderr = proc.communicate(timeout=self.timeout)
        except subprocess.TimeoutExpired as e:
            logger.error(f"Update command timed out after {self.timeout}s")
            self._kill_process_group(proc)
            # Returns once the whole group is gone; the lock stays held until then
            stdout, stderr = proc.communicate()
            raise UpdateError(f"Command timed out after {self.timeout}s: {command}",
                              exit_code=proc.returncode, stdout=stdout, stderr=stderr) from e

        if stdout:
            logger.info(f"Update stdout: {stdout}")
        if stderr:
            logger.warning(f"Update stderr: {stderr}")

        if proc.returncode != 0:
            message = f"Command failed with exit code {proc.returncode}: {command}"
            if stderr.strip():
                message = f"{message}\n{stderr.strip()}"
            logger.error(f"Update failed: {message}")
            raise UpdateError(message, exit_code=proc.returncode,
                              stdout=stdout, stderr=stderr)

        logger.info("Update completed successfully")
        return UpdateOutput(stdout=stdout, stderr=stderr, exit_code=proc.returncode)

    @staticmethod
    def _kill_process_group(proc: subprocess.Popen) -> None:
        try:
            os.killpg(proc.pid, signal.SIGKILL)
        except ProcessLookupError:
            pass
        except PermissionError:
            # sudo-elevated trees cannot be signalled by an unprivileged server
            logger.warning(f"Cannot kill update process group {proc.pid} (permission denied); "
                           "waiting for it to exit")

    def _finish(self, run: UpdateRun, success: bool,
                exit_code: Optional[int] = None, error: Optional[str] = None) -> None:
        with self._state_lock:
            run.finished_at = _now()
            run.success = success
            run.exit_code = exit_code
            run.error = error
            self._runs["success" if success else "failure"] += 1
