import random
import time

import pytest

from tte import config, keys
from tte.keys import Key
from tte.ui import input as ui_input
from tte.ui import screen

MOTION_KEYS = list(keys.ARROWS) + [Key.PAGE_UP, Key.PAGE_DOWN, Key.HOME, Key.END]

def random_rows(rng, count):
    alphabet = b"abc \t"
    return [bytes(rng.choice(alphabet) for _ in range(rng.randrange(0, 40))) for _ in range(count)]

@pytest.mark.parametrize("seed", range(8))
def test_scroll_keeps_cursor_visible(make_context, seed):
    rng = random.Random(seed)
    context = make_context(rows=random_rows(rng, 60), term_rows=12, term_cols=16)
    buf = context.buffer
    for _ in range(400):
        ui_input.process_keypress(context, rng.choice(MOTION_KEYS))
        screen.scroll(context)
        assert 0 <= buf.cursor_y <= buf.num_rows
        assert buf.row_offset <= buf.cursor_y < buf.row_offset + context.screen_rows
        assert buf.col_offset <= buf.render_x < buf.col_offset + context.screen_cols

def test_scroll_is_idempotent(make_context):
    context = make_context(rows=[b"x" * 100] * 50, term_rows=10, term_cols=20)
    buf = context.buffer
    buf.cursor_y, buf.cursor_x = 40, 90
    screen.scroll(context)
    first = (buf.row_offset, buf.col_offset, buf.render_x)
    screen.scroll(context)
    assert (buf.row_offset, buf.col_offset, buf.render_x) == first
    assert first == (40 - 8 + 1, 90 - 20 + 1, 90)

def test_scroll_uses_render_column(make_context):
    context = make_context(rows=[b"\t\t\tx"], term_rows=5, term_cols=10)
    context.buffer.cursor_x = 3
    screen.scroll(context)
    assert context.buffer.render_x == 24
    assert context.buffer.col_offset == 15

def test_frame_layout(make_context):
    context = make_context(rows=[b"hello", b"\tworld"], filename="notes.txt",
                           term_rows=6, term_cols=50)
    context.buffer.row_append(0, b"!")
    context.set_status_message("saved")
    frame = screen.compose_frame(context)

    assert frame.startswith(b"\x1b[?25l\x1b[H")
    assert frame.endswith(b"\x1b[?25h")
    assert b"hello!\x1b[K\r\n" in frame
    assert b"        world\x1b[K\r\n" in frame
    assert frame.count(b"~\x1b[K\r\n") == 2
    assert b"\x1b[7mnotes.txt - 2 lines (modified)" in frame
    assert b"1/2 1/6\x1b[m\r\n" in frame
    assert b"\x1b[Ksaved" in frame
    assert b"\x1b[1;1H" in frame

def test_status_bar_fills_screen_width(make_context):
    context = make_context(rows=[b"abc"], filename="f", term_rows=5, term_cols=40)
    frame = bytearray()
    screen.draw_status_bar(context, frame)
    bar = bytes(frame)[len(screen.INVERSE_ON):-len(screen.INVERSE_OFF + screen.NEWLINE)]
    assert len(bar) == 40
    assert bar.startswith(b"f - 1 lines")
    assert bar.endswith(b"1/1 1/3")

def test_status_bar_truncates_long_file_name(make_context):
    context = make_context(rows=[], filename="a-very-long-file-name-indeed.txt", term_cols=80)
    left, right = screen.status_text(context)
    assert left == "a-very-long-file-nam - 0 lines"
    assert right == "1/0 1/0"

def test_welcome_banner_on_empty_unnamed_buffer(make_context):
    context = make_context(term_rows=11, term_cols=40)
    frame = screen.compose_frame(context)
    banner = f"tte -- version {config.VERSION}".encode()
    lines = frame.split(b"\r\n")
    # screen_rows is 9, so the banner sits on row 3
    assert banner in lines[3]
    assert lines[3].startswith(b"~ ")
    assert b"[No Name] - 0 lines" in frame

def test_no_welcome_banner_for_named_buffer(make_context):
    context = make_context(rows=[], filename="new.txt", term_rows=11, term_cols=40)
    assert b"tte -- version" not in screen.compose_frame(context)

def test_visible_slice_follows_column_offset(make_context):
    context = make_context(rows=[b"0123456789" * 3], term_rows=5, term_cols=10)
    context.buffer.cursor_x = 15
    frame = screen.compose_frame(context)
    assert b"6789012345\x1b[K" in frame
    assert b"\x1b[1;10H" in frame

def test_rows_scrolled_past_are_empty(make_context):
    context = make_context(rows=[b"short", b"x" * 30], term_rows=5, term_cols=10)
    context.buffer.cursor_y, context.buffer.cursor_x = 1, 25
    frame = screen.compose_frame(context)
    assert b"\x1b[H\x1b[K\r\n" in frame

def test_old_message_is_hidden(make_context):
    context = make_context(rows=[b"a"])
    context.status_message = "stale"
    context.status_time = time.time() - 10
    assert b"stale" not in screen.compose_frame(context)

def test_refresh_is_a_single_write(make_context):
    context = make_context(rows=[b"a", b"b"])
    screen.refresh_screen(context)
    assert len(context.terminal.frames) == 1

@pytest.mark.parametrize("text, width, expected", [
    ("hello", 10, "hello"),
    ("hello", 3, "hel"),
    ("日本語", 4, "日本"),
    ("日本語", 5, "日本"),
    ("abc", 0, ""),
])
def test_fit_width(text, width, expected):
    assert screen.fit_width(text, width) == expected

def test_pad_line_counts_wide_characters():
    assert screen.pad_line("日本", 6) == "日本  "
