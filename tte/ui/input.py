"""
Input handling for tte text editor.

Maps each logical key to an action on the context: cursor motion, editing,
or one of the commands.
"""
import curses.ascii

from tte import commands, keys
from tte.keys import Key

def move_cursor(context, key: int):
    """Move the cursor one step, wrapping at line ends and snapping to line length."""
    buf = context.buffer
    row = buf.current_row()
    if key == Key.ARROW_LEFT:
        if buf.cursor_x != 0:
            buf.cursor_x -= 1
        elif buf.cursor_y > 0:
            buf.cursor_y -= 1
            buf.cursor_x = buf.rows[buf.cursor_y].size
    elif key == Key.ARROW_RIGHT:
        if row is not None and buf.cursor_x < row.size:
            buf.cursor_x += 1
        elif row is not None and buf.cursor_x == row.size:
            buf.cursor_y += 1
            buf.cursor_x = 0
    elif key == Key.ARROW_UP:
        if buf.cursor_y != 0:
            buf.cursor_y -= 1
    elif key == Key.ARROW_DOWN:
        if buf.cursor_y < buf.num_rows:
            buf.cursor_y += 1

    row = buf.current_row()
    row_length = row.size if row is not None else 0
    if buf.cursor_x > row_length:
        buf.cursor_x = row_length

def page(context, key: int):
    """Page Up/Down: jump to the edge of the screen, then move a screenful."""
    buf = context.buffer
    if key == Key.PAGE_UP:
        buf.cursor_y = buf.row_offset
        direction = Key.ARROW_UP
    else:
        buf.cursor_y = min(buf.row_offset + context.screen_rows - 1, buf.num_rows)
        direction = Key.ARROW_DOWN
    for _ in range(context.screen_rows):
        move_cursor(context, direction)

def delete_forward(context):
    """Delete the byte under the cursor; at the end of a row, join the next one."""
    buf = context.buffer
    row = buf.current_row()
    if row is None:
        return
    if buf.cursor_x == row.size and buf.cursor_y == buf.num_rows - 1:
        return
    move_cursor(context, Key.ARROW_RIGHT)
    buf.delete_char()

def is_insertable(key: int) -> bool:
    """Printable ASCII, tab, and the bytes of multi-byte characters."""
    if key == keys.TAB:
        return True
    if key < 128:
        return curses.ascii.isprint(key)
    return key < 256

def process_keypress(context, key: int):
    """Handle one logical key."""
    buf = context.buffer
    if key == keys.CTRL_Q:
        commands.quit_editor(context)
        return

    if key == keys.ENTER:
        buf.insert_newline()
    elif key == keys.CTRL_S:
        commands.save(context)
    elif key == keys.CTRL_F:
        commands.find(context)
    elif key == Key.HOME:
        buf.cursor_x = 0
    elif key == Key.END:
        row = buf.current_row()
        if row is not None:
            buf.cursor_x = row.size
    elif key == Key.DELETE:
        delete_forward(context)
    elif key in (keys.BACKSPACE, keys.CTRL_H):
        buf.delete_char()
    elif key in (Key.PAGE_UP, Key.PAGE_DOWN):
        page(context, key)
    elif key in keys.ARROWS:
        move_cursor(context, key)
    elif key in (keys.CTRL_L, keys.ESCAPE):
        pass
    elif is_insertable(key):
        buf.insert_char(key)

    # Any key other than Ctrl-Q starts the quit confirmation over
    context.quit_times = context.settings.quit_times
