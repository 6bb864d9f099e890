"""
Process Manager for socat Forwards

Handles creation and termination of socat processes.
Does not track anything: bookkeeping is the supervisor's job.
"""

import subprocess
import threading
from typing import Any, Callable, List, Optional

from app.core.logging import forward_logger, log_command
from .errors import SpawnFailedError, ToolNotFoundError
from .schemas import Endpoints


class ProcessManager:
    """
    Starts socat forwarders and stops them again.

    This class is responsible for:
    - Building the socat command line
    - Spawning socat without waiting for it
    - Terminating (SIGTERM, then SIGKILL) and reaping a process

    It does NOT know about forward ids beyond using them in log lines.
    """

    def __init__(
        self,
        socat_binary: str = "socat",
        spawn_grace_seconds: float = 0.0,
        stop_wait_timeout: Optional[float] = 10.0,
        popen: Callable[..., Any] = subprocess.Popen,
    ):
        self.socat_binary = socat_binary
        self.spawn_grace_seconds = spawn_grace_seconds
        self.stop_wait_timeout = stop_wait_timeout
        self._popen = popen

    def build_command(self, endpoints: Endpoints) -> List[str]:
        return [self.socat_binary, endpoints.listen_spec, endpoints.target_spec]

    def spawn(self, endpoints: Endpoints) -> Any:
        """
        Start socat for the given endpoints.

        Returns:
            The child process handle

        Raises:
            ToolNotFoundError: socat is not on PATH
            SpawnFailedError: any other start failure
        """
        cmd = self.build_command(endpoints)
        log_command(forward_logger, cmd)

        try:
            process = self._popen(
                cmd,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                close_fds=True,
            )
        except FileNotFoundError as e:
            forward_logger.error(f"Error starting socat process: {e}")
            raise ToolNotFoundError(self.socat_binary) from e
        except OSError as e:
            forward_logger.error(f"Error starting socat process: {e}")
            raise SpawnFailedError(str(e)) from e

        if self.spawn_grace_seconds > 0:
            # Give socat time to bind; an early exit means the listen failed
            try:
                returncode = process.wait(timeout=self.spawn_grace_seconds)
            except subprocess.TimeoutExpired:
                pass
            else:
                forward_logger.error(
                    f"Socat forwarder failed to start: PID {process.pid}, "
                    f"returncode={returncode}"
                )
                raise SpawnFailedError(
                    f"socat exited immediately with status {returncode}"
                )

        forward_logger.info(f"Socat process started with PID: {process.pid}")
        return process

    def terminate(self, process: Any, forward_id: str) -> None:
        """
        Stop a forward's process and reap it.

        Failures are logged, never raised: by the time this runs the forward
        is already gone from the registry.
        """
        pid = process.pid
        forward_logger.info(f"Stopping socat forward (ID: {forward_id}): PID {pid}")

        try:
            process.terminate()
        except OSError as e:
            forward_logger.warning(
                f"Failed to send SIGTERM to process {pid} (ID: {forward_id}): {e}. "
                "Attempting SIGKILL."
            )
            try:
                process.kill()
            except OSError as kill_error:
                forward_logger.warning(
                    f"Failed to send SIGKILL to process {pid} (ID: {forward_id}): "
                    f"{kill_error}"
                )
            else:
                forward_logger.info(
                    f"Successfully sent SIGKILL to process {pid} (ID: {forward_id})."
                )
        else:
            forward_logger.info(
                f"Successfully sent SIGTERM to process {pid} (ID: {forward_id})."
            )

        self._reap(process, forward_id)

    def _reap(self, process: Any, forward_id: str) -> None:
        pid = process.pid
        try:
            process.wait(timeout=self.stop_wait_timeout)
        except subprocess.TimeoutExpired:
            forward_logger.warning(
                f"Process {pid} (ID: {forward_id}) did not exit within "
                f"{self.stop_wait_timeout}s, sending SIGKILL and reaping in background"
            )
            try:
                process.kill()
            except OSError as e:
                forward_logger.warning(f"Failed to send SIGKILL to process {pid}: {e}")
            threading.Thread(
                target=self._reap_detached,
                args=(process, forward_id),
                name=f"reap-{pid}",
                daemon=True,
            ).start()
            return
        except ChildProcessError:
            # Already reaped elsewhere
            pass
        except OSError as e:
            forward_logger.error(
                f"Error waiting for process {pid} (ID: {forward_id}) to exit: {e}"
            )
            return

        forward_logger.info(f"Process {pid} (ID: {forward_id}) confirmed exited.")

    @staticmethod
    def _reap_detached(process: Any, forward_id: str) -> None:
        try:
            process.wait()
        except ChildProcessError:
            pass
        except OSError as e:
            forward_logger.error(
                f"Error reaping process {process.pid} (ID: {forward_id}): {e}"
            )
            return
        forward_logger.info(
            f"Process {process.pid} (ID: {forward_id}) reaped in background."
        )

    @staticmethod
    def reap_if_exited(process: Any) -> Optional[int]:
        """Non-blocking reap so a dead child doesn't linger as a zombie."""
        try:
            return process.poll()
        except OSError as e:
            forward_logger.debug(f"Could not poll process {process.pid}: {e}")
            return None
