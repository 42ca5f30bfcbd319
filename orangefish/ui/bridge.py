# -*- coding: utf-8 -*-
"""
OrangeFish Backend Bridge
Runs the backend as a child process and exchanges JSON lines with it.

Commands are written to the backend's stdin; events are read from its
stdout through QProcess signals, so they arrive on the UI thread one at a
time and in the order the backend wrote them.
"""

from PySide6 import QtCore

from orangefish.core import log
from orangefish.core.result import BackendUnavailableError
from orangefish.protocol.transport import LineBuffer, decode_line, encode_command


class BackendBridge(QtCore.QObject):
    """
    CommandTransport backed by a QProcess.

    Signals:
        event_received: A valid inbound event (typed dataclass)
        message_rejected: A line that failed validation (AppError)
        backend_failed: The process failed to start or exited (message)
    """

    event_received = QtCore.Signal(object)
    message_rejected = QtCore.Signal(object)
    backend_failed = QtCore.Signal(str)

    def __init__(self, program: str, args=None, parent=None):
        super().__init__(parent)
        self._program = program
        self._args = list(args or [])
        self._buffer = LineBuffer()
        self._stopping = False

        self._process = QtCore.QProcess(self)
        self._process.readyReadStandardOutput.connect(self._on_stdout)
        self._process.readyReadStandardError.connect(self._on_stderr)
        self._process.errorOccurred.connect(self._on_process_error)
        self._process.finished.connect(self._on_finished)

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def start(self):
        """Launch the backend process (no shell)."""
        self._stopping = False
        log.info(f"Starting backend: {self._program} {' '.join(self._args)}".strip())
        self._process.start(self._program, self._args)

    def stop(self, timeout_ms: int = 3000):
        """Close the backend's stdin and wait for it to exit."""
        if self._process.state() == QtCore.QProcess.NotRunning:
            return
        self._stopping = True
        self._process.closeWriteChannel()
        if not self._process.waitForFinished(timeout_ms):
            log.warning("Backend did not exit in time, terminating")
            self._process.kill()
            self._process.waitForFinished(timeout_ms)

    def is_running(self) -> bool:
        return self._process.state() == QtCore.QProcess.Running

    # =========================================================================
    # CommandTransport
    # =========================================================================

    def send(self, command):
        """
        Write one command line to the backend.

        Raises:
            BackendUnavailableError: The backend process is not running
        """
        if not self.is_running():
            raise BackendUnavailableError("The backend process is not running.")
        written = self._process.write(encode_command(command))
        if written < 0:
            raise BackendUnavailableError(f"Could not write '{command.name}' to the backend.")

    # =========================================================================
    # Process signals
    # =========================================================================

    def _on_stdout(self):
        chunk = bytes(self._process.readAllStandardOutput())
        for line in self._buffer.feed(chunk):
            result = decode_line(line)
            if result.ok:
                self.event_received.emit(result.value)
            else:
                self.message_rejected.emit(result.error)

    def _on_stderr(self):
        text = bytes(self._process.readAllStandardError()).decode("utf-8", errors="replace")
        for line in text.splitlines():
            if line.strip():
                log.debug(f"backend: {line}")

    def _on_process_error(self, error):
        if error == QtCore.QProcess.FailedToStart:
            message = f"Could not start the backend '{self._program}'."
            log.error(message)
            self.backend_failed.emit(message)

    def _on_finished(self, exit_code, exit_status=None):
        if self._stopping:
            log.info("Backend stopped")
            return
        message = f"The backend exited unexpectedly (code {exit_code})."
        log.error(message)
        self.backend_failed.emit(message)
