"""
Render mapping for tte rows.

A row is stored raw (exactly the bytes of the file) and displayed with tabs
expanded to the next tab stop. These helpers convert between the two column
systems and build the expanded form.
"""

TAB_STOP = 8
TAB = 0x09

def cursor_x_to_render_x(raw: bytes, cursor_x: int) -> int:
    """Return the display column of raw column `cursor_x`."""
    render_x = 0
    for byte in raw[:cursor_x]:
        if byte == TAB:
            render_x += (TAB_STOP - 1) - (render_x % TAB_STOP)
        render_x += 1
    return render_x

def render_x_to_cursor_x(raw: bytes, render_x: int) -> int:
    """
    Return the raw column that is displayed at `render_x`.
    Columns past the end of the line map to the end of the line.
    """
    current = 0
    for cursor_x, byte in enumerate(raw):
        if byte == TAB:
            current += (TAB_STOP - 1) - (current % TAB_STOP)
        current += 1
        if current > render_x:
            return cursor_x
    return len(raw)

def expand_tabs(raw: bytes) -> bytes:
    """Build the display form of `raw`: every tab becomes 1-8 spaces."""
    if TAB not in raw:
        return bytes(raw)
    out = bytearray()
    for byte in raw:
        if byte == TAB:
            out.append(0x20)
            while len(out) % TAB_STOP != 0:
                out.append(0x20)
        else:
            out.append(byte)
    return bytes(out)
