"""
tte/ui/screen.py

Implements all screen drawing for the tte text editor: keeping the cursor
inside the viewport, then composing the text rows, status bar and message bar
into one frame that is written to the terminal in a single call.
"""

import time
from wcwidth import wcwidth, wcswidth

from tte import config

HIDE_CURSOR = b"\x1b[?25l"
SHOW_CURSOR = b"\x1b[?25h"
CURSOR_HOME = b"\x1b[H"
CLEAR_LINE = b"\x1b[K"
INVERSE_ON = b"\x1b[7m"
INVERSE_OFF = b"\x1b[m"
NEWLINE = b"\r\n"

FILLER = b"~"
NO_NAME = "[No Name]"
FILENAME_WIDTH = 20

###############################################################################
# TEXT FITTING
###############################################################################

def text_width(text: str) -> int:
    """Number of terminal cells `text` occupies (unprintables count as one)."""
    width = wcswidth(text)
    if width >= 0:
        return width
    return sum(max(wcwidth(ch), 1) for ch in text)

def fit_width(text: str, width: int) -> str:
    """Cut `text` so it occupies at most `width` terminal cells."""
    if width <= 0:
        return ""
    if text_width(text) <= width:
        return text
    used = 0
    for i, ch in enumerate(text):
        cells = max(wcwidth(ch), 1)
        if used + cells > width:
            return text[:i]
        used += cells
    return text

def pad_line(text, width):
    """Pad or trim a string to match the visual width."""
    text = fit_width(text, width)
    return text + " " * (width - text_width(text))

###############################################################################
# VIEWPORT
###############################################################################

def scroll(context):
    """
    Recompute render_x and move the viewport just enough to show the cursor.
    Calling it again without moving the cursor changes nothing.
    """
    buf = context.buffer
    row = buf.current_row()
    buf.render_x = row.cursor_to_render(buf.cursor_x) if row is not None else 0

    if buf.cursor_y < buf.row_offset:
        buf.row_offset = buf.cursor_y
    if buf.cursor_y >= buf.row_offset + context.screen_rows:
        buf.row_offset = buf.cursor_y - context.screen_rows + 1
    if buf.render_x < buf.col_offset:
        buf.col_offset = buf.render_x
    if buf.render_x >= buf.col_offset + context.screen_cols:
        buf.col_offset = buf.render_x - context.screen_cols + 1

###############################################################################
# FRAME PARTS
###############################################################################

def draw_welcome(context, frame: bytearray):
    """Centered version banner shown on an empty, unnamed buffer."""
    welcome = fit_width(f"tte -- version {config.VERSION}", context.screen_cols)
    padding = (context.screen_cols - text_width(welcome)) // 2
    if padding:
        frame += FILLER
        padding -= 1
    frame += b" " * padding
    frame += welcome.encode("utf-8")

def draw_rows(context, frame: bytearray):
    buf = context.buffer
    show_welcome = buf.num_rows == 0 and buf.filename is None
    for y in range(context.screen_rows):
        file_row = buf.row_offset + y
        if file_row >= buf.num_rows:
            if show_welcome and y == context.screen_rows // 3:
                draw_welcome(context, frame)
            else:
                frame += FILLER
        else:
            line = buf.rows[file_row].render
            frame += line[buf.col_offset:buf.col_offset + context.screen_cols]
        frame += CLEAR_LINE
        frame += NEWLINE

def status_text(context):
    """Return the (left, right) halves of the status bar."""
    buf = context.buffer
    name = fit_width(buf.filename or NO_NAME, FILENAME_WIDTH)
    modified = " (modified)" if buf.dirty else ""
    left = f"{name} - {buf.num_rows} lines{modified}"
    row = buf.current_row()
    row_length = row.size if row is not None else 0
    right = f"{buf.cursor_y + 1}/{buf.num_rows} {buf.cursor_x + 1}/{row_length}"
    return left, right

def draw_status_bar(context, frame: bytearray):
    """Inverse-video bar: file name and size on the left, position on the right."""
    left, right = status_text(context)
    width = context.screen_cols
    left = fit_width(left, width)
    used = text_width(left)
    right_width = text_width(right)
    if used + right_width <= width:
        bar = left + " " * (width - used - right_width) + right
    else:
        bar = pad_line(left, width)
    frame += INVERSE_ON
    frame += bar.encode("utf-8")
    frame += INVERSE_OFF
    frame += NEWLINE

def draw_message_bar(context, frame: bytearray):
    frame += CLEAR_LINE
    message = context.status_message
    if message and time.time() - context.status_time < context.settings.message_timeout:
        frame += fit_width(message, context.screen_cols).encode("utf-8")

def cursor_position(context) -> bytes:
    buf = context.buffer
    screen_y = buf.cursor_y - buf.row_offset + 1
    screen_x = buf.render_x - buf.col_offset + 1
    return f"\x1b[{screen_y};{screen_x}H".encode("ascii")

###############################################################################
# FRAME
###############################################################################

def compose_frame(context) -> bytes:
    """Scroll, then build one complete frame."""
    scroll(context)
    frame = bytearray()
    frame += HIDE_CURSOR
    frame += CURSOR_HOME
    draw_rows(context, frame)
    draw_status_bar(context, frame)
    draw_message_bar(context, frame)
    frame += cursor_position(context)
    frame += SHOW_CURSOR
    return bytes(frame)

def refresh_screen(context):
    """Re-draw the entire screen with a single write."""
    context.terminal.write(compose_frame(context))
