"""
Buffer module for tte text editor.

Defines the Row and Buffer classes that hold the text being edited. A Buffer
owns its rows, the cursor position within them, the scroll offsets of the
viewport and a counter of unsaved modifications.
"""
import errno
import os

from tte import render

class Row:
    """One line of text: raw bytes plus their tab-expanded display form."""
    def __init__(self, raw: bytes = b""):
        self._raw = bytes(raw)
        self._render = render.expand_tabs(self._raw)

    @property
    def raw(self) -> bytes:
        return self._raw

    @raw.setter
    def raw(self, value: bytes):
        self._raw = bytes(value)
        self.update_render()

    @property
    def render(self) -> bytes:
        return self._render

    @property
    def size(self) -> int:
        return len(self._raw)

    def update_render(self):
        self._render = render.expand_tabs(self._raw)

    def cursor_to_render(self, cursor_x: int) -> int:
        return render.cursor_x_to_render_x(self._raw, cursor_x)

    def render_to_cursor(self, render_x: int) -> int:
        return render.render_x_to_cursor_x(self._raw, render_x)

    def __repr__(self):
        return f"Row({self._raw!r})"

class Buffer:
    """Represents a text buffer (file content) with editing operations."""
    def __init__(self, filename: str = None, rows=None):
        self.filename = filename  # Path to file or None for new/unsaved
        self.rows = [Row(raw) for raw in rows] if rows is not None else []
        # Number of modifications since the last load or save (0 = clean)
        self.dirty = 0
        # Cursor position in raw coordinates; cursor_y == len(rows) is the
        # virtual line below the end of the file.
        self.cursor_x = 0
        self.cursor_y = 0
        # Cursor column after tab expansion, refreshed on every scroll
        self.render_x = 0
        # Top-left corner of the visible window
        self.row_offset = 0
        self.col_offset = 0

    @property
    def num_rows(self) -> int:
        return len(self.rows)

    def current_row(self):
        """Return the row under the cursor, or None on the virtual last line."""
        if self.cursor_y < len(self.rows):
            return self.rows[self.cursor_y]
        return None

    ##########################################
    # ROW OPERATIONS
    ##########################################
    def insert_row(self, at: int, raw: bytes = b""):
        at = max(0, min(at, len(self.rows)))
        self.rows.insert(at, Row(raw))
        self.dirty += 1

    def delete_row(self, at: int):
        if not 0 <= at < len(self.rows):
            return
        del self.rows[at]
        self.dirty += 1

    def row_insert_char(self, y: int, at: int, byte: int):
        row = self.rows[y]
        at = max(0, min(at, row.size))
        row.raw = row.raw[:at] + bytes((byte,)) + row.raw[at:]
        self.dirty += 1

    def row_delete_char(self, y: int, at: int):
        row = self.rows[y]
        if not 0 <= at < row.size:
            return
        row.raw = row.raw[:at] + row.raw[at + 1:]
        self.dirty += 1

    def row_append(self, y: int, data: bytes):
        row = self.rows[y]
        row.raw = row.raw + data
        self.dirty += 1

    def row_truncate(self, y: int, at: int):
        row = self.rows[y]
        row.raw = row.raw[:max(0, at)]
        self.dirty += 1

    ##########################################
    # EDITING
    ##########################################
    def insert_char(self, byte: int):
        """Insert one byte at the cursor and move past it."""
        if self.cursor_y == len(self.rows):
            self.insert_row(len(self.rows), b"")
        self.row_insert_char(self.cursor_y, self.cursor_x, byte)
        self.cursor_x += 1

    def insert_newline(self):
        """Break the line at the cursor; the cursor moves to the start of the new line."""
        if self.cursor_x == 0:
            self.insert_row(self.cursor_y, b"")
        else:
            row = self.rows[self.cursor_y]
            remainder = row.raw[self.cursor_x:]
            self.insert_row(self.cursor_y + 1, remainder)
            self.row_truncate(self.cursor_y, self.cursor_x)
        self.cursor_y += 1
        self.cursor_x = 0

    def delete_char(self):
        """Delete the byte left of the cursor, joining lines at column 0."""
        if self.cursor_y == len(self.rows):
            return
        if self.cursor_x == 0 and self.cursor_y == 0:
            return
        if self.cursor_x > 0:
            self.row_delete_char(self.cursor_y, self.cursor_x - 1)
            self.cursor_x -= 1
        else:
            previous = self.rows[self.cursor_y - 1]
            self.cursor_x = previous.size
            self.row_append(self.cursor_y - 1, self.rows[self.cursor_y].raw)
            self.delete_row(self.cursor_y)
            self.cursor_y -= 1

    ##########################################
    # SEARCH
    ##########################################
    def find(self, needle: bytes):
        """
        Return (row index, raw column) of the first row whose display form
        contains `needle`, scanning from the top, or None.
        """
        for y, row in enumerate(self.rows):
            match = row.render.find(needle)
            if match != -1:
                return y, row.render_to_cursor(match)
        return None

    ##########################################
    # PERSISTENCE
    ##########################################
    def rows_to_text(self) -> bytes:
        """Serialize all rows, each terminated by a newline."""
        return b"".join(row.raw + b"\n" for row in self.rows)

    def save_to_file(self) -> int:
        """
        Write the buffer contents to self.filename.
        Returns the number of bytes written; raises OSError on failure, in
        which case the buffer stays dirty.
        """
        if not self.filename:
            raise ValueError("buffer has no file name")
        data = self.rows_to_text()
        fd = os.open(self.filename, os.O_RDWR | os.O_CREAT, 0o644)
        try:
            os.ftruncate(fd, len(data))
            written = os.write(fd, data)
            if written != len(data):
                raise OSError(errno.EIO, f"short write ({written} of {len(data)} bytes)")
        finally:
            os.close(fd)
        self.dirty = 0
        return len(data)

def split_lines(data: bytes):
    """
    Split file contents into raw rows. Each line loses its newline and then
    a single trailing carriage return; a last line without a newline still
    counts as a row.
    """
    lines = data.split(b"\n")
    if lines and lines[-1] == b"":
        lines.pop()
    return [line[:-1] if line.endswith(b"\r") else line for line in lines]

def from_bytes(data: bytes, filename: str = None) -> Buffer:
    """Build a clean buffer from serialized file contents."""
    buf = Buffer(filename, split_lines(data))
    buf.dirty = 0
    return buf

def load_file(filename: str) -> Buffer:
    """Read `filename` into a new Buffer. Raises OSError if it can't be opened."""
    with open(filename, 'rb') as f:
        data = f.read()
    return from_bytes(data, filename)
