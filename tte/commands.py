"""
Commands for the tte text editor.

This module holds the actions bound to control keys: saving the buffer,
incremental search and quitting.
"""
from tte import keys, logger
from tte.ui import prompt

SAVE_AS_PROMPT = "Save as: {} (ESC to cancel)"
SEARCH_PROMPT = "Search: {} (ESC to cancel)"

def save(context):
    """Write the buffer to its file, asking for a name if it has none."""
    buf = context.buffer
    if buf.filename is None:
        filename = prompt.prompt(context, SAVE_AS_PROMPT)
        if filename is None:
            context.set_status_message("Save aborted")
            return
        buf.filename = filename
    try:
        written = buf.save_to_file()
    except OSError as e:
        context.set_status_message(f"Can't save! I/O error: {e.strerror or e}")
        logger.log_error(f"save failed: {buf.filename}", e)
        return
    context.set_status_message(f"{written} bytes written to disk")
    context.log_command(f"saved {buf.filename} ({written} bytes)")

class IncrementalSearch:
    """
    Prompt callback that moves the cursor to the first match of the query
    while it is typed. Cancelling puts cursor and viewport back where they were.
    """
    def __init__(self, context):
        self.context = context
        buf = context.buffer
        self.saved_cursor_x = buf.cursor_x
        self.saved_cursor_y = buf.cursor_y
        self.saved_col_offset = buf.col_offset
        self.saved_row_offset = buf.row_offset
        self.found = False

    def restore(self):
        buf = self.context.buffer
        buf.cursor_x = self.saved_cursor_x
        buf.cursor_y = self.saved_cursor_y
        buf.col_offset = self.saved_col_offset
        buf.row_offset = self.saved_row_offset

    def __call__(self, query: str, key: int):
        if key == keys.ESCAPE:
            self.restore()
            return
        if key == keys.ENTER or key in keys.ARROWS or not query:
            return
        buf = self.context.buffer
        match = buf.find(query.encode("utf-8"))
        self.found = match is not None
        if match is None:
            return
        buf.cursor_y, buf.cursor_x = match
        # Past the last row, so the next scroll brings the match to the top
        buf.row_offset = buf.num_rows

def find(context):
    """
    Incremental search. Enter or an arrow key keeps the match; Escape restores
    the position from before the search.
    """
    search = IncrementalSearch(context)
    query = prompt.prompt(context, SEARCH_PROMPT, search, accept_keys=keys.ARROWS)
    if query is None:
        context.log_command("search cancelled")
        return
    if query and not search.found:
        context.set_status_message(f"No match for '{query}'")
    context.log_command(f"search: '{query}'")

def quit_editor(context):
    """
    Exit, unless the buffer has unsaved changes: then Ctrl-Q must be pressed
    quit_times times in a row.
    """
    context.quit_times -= 1
    if context.buffer.dirty and context.quit_times > 0:
        context.set_status_message(
            "WARNING!!! File has unsaved changes. "
            f"Press Ctrl-Q {context.quit_times} more times to quit."
        )
        return
    context.graceful_exit()
