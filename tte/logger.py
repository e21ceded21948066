"""
Logger module for the tte text editor.

Provides a simple file-based logger for debugging and error tracking. The log
file is chosen once at startup from the settings; until then nothing is written.
"""
import datetime
import os

# Path of the log file, or None while logging is disabled
LOG_FILE_PATH = None

def configure(path) -> None:
    """Point the logger at `path` (expanded); an empty path disables logging."""
    global LOG_FILE_PATH
    if not path:
        LOG_FILE_PATH = None
        return
    LOG_FILE_PATH = os.path.expanduser(path)
    try:
        os.makedirs(os.path.dirname(LOG_FILE_PATH) or ".", exist_ok=True)
    except OSError:
        # Directory can't be created; log() will fail quietly later on.
        pass

def log(message: str) -> None:
    """Append a timestamped message to the log file."""
    if LOG_FILE_PATH is None:
        return
    try:
        with open(LOG_FILE_PATH, 'a', encoding='utf-8') as f:
            timestamp = datetime.datetime.now().strftime("%Y-%m-%d %H:%M:%S")
            f.write(f"[{timestamp}] {message}\n")
    except OSError:
        # If logging fails (e.g., file not writable), ignore to avoid crashing the editor.
        pass

def log_error(message: str, exc: BaseException) -> None:
    """Log a failure together with the exception that caused it."""
    log(f"ERROR {message}: {exc.__class__.__name__}: {exc}")
