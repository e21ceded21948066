"""
Terminal handling for tte.

Puts the controlling terminal into raw mode, reads input one byte at a time,
writes whole frames, and reports the window size. Everything the editor
changes on the terminal is undone on exit, including exits caused by errors
and termination signals.
"""
import atexit
import errno
import os
import signal
import sys
import termios

from tte import logger

ENTER_ALTERNATE_SCREEN = b"\x1b[?47h"
LEAVE_ALTERNATE_SCREEN = b"\x1b[?47l"
CLEAR_SCREEN = b"\x1b[2J"
CURSOR_HOME = b"\x1b[H"

class TerminalError(Exception):
    """A terminal operation failed in a way the editor can't recover from."""
    def __init__(self, message: str, cause: OSError = None):
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self):
        if self.cause is not None:
            detail = self.cause.strerror or str(self.cause)
            return f"{self.message}: {detail}"
        return self.message

class Terminal:
    """Raw-mode terminal on a pair of file descriptors (stdin/stdout by default)."""
    def __init__(self, fd_in: int = None, fd_out: int = None, alternate_screen: bool = True):
        self.fd_in = sys.stdin.fileno() if fd_in is None else fd_in
        self.fd_out = sys.stdout.fileno() if fd_out is None else fd_out
        self.use_alternate_screen = alternate_screen
        self.original_attrs = None
        self.in_alternate_screen = False
        self._atexit_registered = False
        self._previous_handlers = {}

    ##########################################
    # RAW MODE
    ##########################################
    def enable_raw_mode(self):
        try:
            self.original_attrs = termios.tcgetattr(self.fd_in)
        except termios.error as e:
            raise TerminalError("Failed to get current terminal state", _as_os_error(e)) from e
        if not self._atexit_registered:
            atexit.register(self.disable_raw_mode)
            self._atexit_registered = True

        raw = termios.tcgetattr(self.fd_in)
        # No break signal, CR translation, parity check, 8th bit strip or flow control
        raw[0] &= ~(termios.BRKINT | termios.ICRNL | termios.INPCK | termios.ISTRIP | termios.IXON)
        # No output post-processing ("\n" is not turned into "\r\n")
        raw[1] &= ~termios.OPOST
        raw[2] |= termios.CS8
        # No echo, line buffering, Ctrl-V or signal keys (Ctrl-C, Ctrl-Z)
        raw[3] &= ~(termios.ECHO | termios.ICANON | termios.IEXTEN | termios.ISIG)
        # read() returns after at most 100ms, with or without input
        raw[6][termios.VMIN] = 0
        raw[6][termios.VTIME] = 1
        try:
            termios.tcsetattr(self.fd_in, termios.TCSAFLUSH, raw)
        except termios.error as e:
            raise TerminalError("Failed to set raw mode", _as_os_error(e)) from e

    def disable_raw_mode(self):
        """Restore the terminal attributes saved by enable_raw_mode (safe to call twice)."""
        if self.original_attrs is None:
            return
        attrs, self.original_attrs = self.original_attrs, None
        try:
            termios.tcsetattr(self.fd_in, termios.TCSAFLUSH, attrs)
        except termios.error as e:
            logger.log_error("Failed to disable raw mode", e)

    ##########################################
    # SCREEN
    ##########################################
    def enter_alternate_screen(self):
        if self.in_alternate_screen:
            return
        self.write(ENTER_ALTERNATE_SCREEN)
        self.in_alternate_screen = True

    def leave_alternate_screen(self):
        if not self.in_alternate_screen:
            return
        self.in_alternate_screen = False
        self.write(LEAVE_ALTERNATE_SCREEN)

    def clear_screen(self):
        self.write(CLEAR_SCREEN + CURSOR_HOME)

    def get_size(self):
        """Return (rows, cols) of the terminal window."""
        try:
            size = os.get_terminal_size(self.fd_out)
        except OSError as e:
            raise TerminalError("Failed to get window size", e) from e
        if size.columns == 0:
            raise TerminalError("Failed to get window size: terminal reports zero width")
        return size.lines, size.columns

    ##########################################
    # I/O
    ##########################################
    def read_byte(self):
        """Return one input byte, or None if none arrived within the timeout."""
        try:
            data = os.read(self.fd_in, 1)
        except BlockingIOError:
            return None
        except InterruptedError:
            return None
        except OSError as e:
            raise TerminalError("Error reading input", e) from e
        if not data:
            return None
        return data[0]

    def write(self, data: bytes):
        view = memoryview(data)
        while view:
            try:
                written = os.write(self.fd_out, view)
            except InterruptedError:
                continue
            except OSError as e:
                if e.errno == errno.EAGAIN:
                    continue
                raise TerminalError("Error writing output", e) from e
            view = view[written:]

    ##########################################
    # SIGNALS
    ##########################################
    def install_resize_handler(self, callback):
        """
        Call `callback()` whenever the window size changes. The callback runs
        inside the signal handler, so it must only record that a resize
        happened and leave the redraw to the main loop.
        """
        def handle_resize(signum, frame):
            callback()
        self._install_handler(signal.SIGWINCH, handle_resize)

    def install_termination_handlers(self):
        """Turn SIGTERM/SIGHUP into SystemExit so the terminal gets restored."""
        def handle_termination(signum, frame):
            raise SystemExit(128 + signum)
        for signum in (signal.SIGTERM, signal.SIGHUP):
            self._install_handler(signum, handle_termination)

    def _install_handler(self, signum, handler):
        previous = signal.signal(signum, handler)
        self._previous_handlers.setdefault(signum, previous)

    def restore_signal_handlers(self):
        for signum, handler in self._previous_handlers.items():
            signal.signal(signum, handler if handler is not None else signal.SIG_DFL)
        self._previous_handlers.clear()

    ##########################################
    # CONTEXT MANAGER
    ##########################################
    def __enter__(self):
        self.enable_raw_mode()
        self.install_termination_handlers()
        if self.use_alternate_screen:
            self.enter_alternate_screen()
        return self

    def __exit__(self, exc_type, exc, tb):
        try:
            self.clear_screen()
            self.leave_alternate_screen()
        except TerminalError as e:
            logger.log_error("Failed to reset the screen", e)
        finally:
            self.restore_signal_handlers()
            self.disable_raw_mode()
        return False

def _as_os_error(error: termios.error) -> OSError:
    """termios.error carries (errno, message); turn it into an OSError."""
    args = getattr(error, "args", ())
    if len(args) >= 2 and isinstance(args[0], int):
        return OSError(args[0], args[1])
    return OSError(str(error))
