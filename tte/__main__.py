"""
Main entry point and editor context for the tte text editor.
"""
import sys
import time

from tte import buffer, config, keys, logger
from tte.terminal import Terminal, TerminalError
from tte.ui import input as ui_input
from tte.ui import screen

USAGE = "usage: tte [file]"
HELP_MESSAGE = "HELP: Ctrl-S = save | Ctrl-Q = quit | Ctrl-F = find"

class EditorContext:
    """
    Holds the state of the editor: the terminal it draws on, the buffer being
    edited, screen geometry, the status message and the quit/resize flags.
    """
    def __init__(self, terminal, settings: config.Settings = None):
        self.terminal = terminal
        self.settings = settings if settings is not None else config.Settings()

        self.buffer = buffer.Buffer()

        # Text area size (terminal minus the status and message bars)
        self.screen_rows = 1
        self.screen_cols = 1
        self.update_geometry()

        # Message bar
        self.status_message = ""
        self.status_time = 0.0

        # Ctrl-Q presses left before unsaved changes are dropped
        self.quit_times = self.settings.quit_times

        # Set from the SIGWINCH handler, acted on by the main loop
        self.resize_pending = False

        # "ui" interface (screen drawing)
        self.ui = screen

        # Running flag
        self.exit_flag = False

    def update_geometry(self):
        """Re-read the terminal size; two rows are kept for the status and message bars."""
        rows, cols = self.terminal.get_size()
        self.screen_rows = max(1, rows - 2)
        self.screen_cols = max(1, cols)

    def set_status_message(self, message: str):
        self.status_message = message
        self.status_time = time.time()

    def log_command(self, msg: str):
        """Log a command or action to the debug log file."""
        logger.log(msg)

    def open_file(self, filename: str):
        """Load `filename` into a fresh buffer. Raises OSError if it can't be read."""
        self.buffer = buffer.load_file(filename)
        self.log_command(f"file opened: {filename} ({self.buffer.num_rows} lines)")

    def request_resize(self):
        """Called from the signal handler: only note that the window changed."""
        self.resize_pending = True

    def handle_idle(self):
        """Runs between key reads; applies a pending resize and redraws."""
        if not self.resize_pending:
            return
        self.resize_pending = False
        self.update_geometry()
        self.log_command(f"resized to {self.screen_rows + 2}x{self.screen_cols}")
        self.ui.refresh_screen(self)

    def read_key(self) -> int:
        return keys.read_key(self.terminal.read_byte, idle=self.handle_idle)

    def graceful_exit(self):
        """Stop the main loop; the terminal is restored when the loop unwinds."""
        logger.log("Editor exited.")
        self.exit_flag = True

def run_editor(context):
    """The main loop: draw a frame, wait for a key, handle it."""
    while not context.exit_flag:
        context.ui.refresh_screen(context)
        key = context.read_key()
        ui_input.process_keypress(context, key)

def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    if len(argv) > 1:
        print(USAGE, file=sys.stderr)
        return 1

    settings = config.load_settings()
    logger.configure(settings.log_file)
    logger.log("Editor started.")

    terminal = Terminal(alternate_screen=settings.alternate_screen)
    try:
        with terminal:
            context = EditorContext(terminal, settings)
            if argv:
                context.open_file(argv[0])
            context.set_status_message(HELP_MESSAGE)
            terminal.install_resize_handler(context.request_resize)
            run_editor(context)
    except TerminalError as e:
        logger.log_error("fatal terminal error", e)
        print(f"tte: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        logger.log_error("fatal I/O error", e)
        target = f"{argv[0]}: " if argv else ""
        print(f"tte: {target}{e.strerror or e}", file=sys.stderr)
        return 1
    return 0

def run():
    """Console-script entry point."""
    sys.exit(main())

if __name__ == "__main__":
    run()
