"""
Logical keys for tte and the decoder that produces them from raw terminal bytes.

Plain bytes are passed through as ints (0-255). Keys that arrive as escape
sequences are decoded into Key members, which lie above the byte range.
"""
import curses.ascii
import enum

class Key(enum.IntEnum):
    ARROW_LEFT = 1000
    ARROW_RIGHT = 1001
    ARROW_UP = 1002
    ARROW_DOWN = 1003
    PAGE_UP = 1004
    PAGE_DOWN = 1005
    HOME = 1006
    END = 1007
    DELETE = 1008

ESCAPE = curses.ascii.ESC
ENTER = curses.ascii.CR
BACKSPACE = curses.ascii.DEL
TAB = curses.ascii.TAB

def ctrl(letter: str) -> int:
    """Key code produced by holding Ctrl with `letter`."""
    return curses.ascii.ctrl(ord(letter))

CTRL_F = ctrl("f")
CTRL_H = ctrl("h")
CTRL_L = ctrl("l")
CTRL_Q = ctrl("q")
CTRL_S = ctrl("s")

ARROWS = (Key.ARROW_LEFT, Key.ARROW_RIGHT, Key.ARROW_UP, Key.ARROW_DOWN)

###############################################################################
# ESCAPE SEQUENCE TABLES
###############################################################################

# ESC [ <byte>
CSI_KEYS = {
    ord("A"): Key.ARROW_UP,
    ord("B"): Key.ARROW_DOWN,
    ord("C"): Key.ARROW_RIGHT,
    ord("D"): Key.ARROW_LEFT,
    ord("H"): Key.HOME,
    ord("F"): Key.END,
}

# ESC [ <digit> ~  (Home and End have two encodings each depending on the terminal)
CSI_TILDE_KEYS = {
    ord("1"): Key.HOME,
    ord("7"): Key.HOME,
    ord("4"): Key.END,
    ord("8"): Key.END,
    ord("3"): Key.DELETE,
    ord("5"): Key.PAGE_UP,
    ord("6"): Key.PAGE_DOWN,
}

# ESC O <byte>
SS3_KEYS = {
    ord("H"): Key.HOME,
    ord("F"): Key.END,
}

class State(enum.Enum):
    NORMAL = "normal"
    SAW_ESCAPE = "saw_escape"
    SAW_BRACKET = "saw_bracket"
    SAW_BRACKET_DIGIT = "saw_bracket_digit"
    SAW_O = "saw_o"

class KeyDecoder:
    """
    Byte-at-a-time escape sequence decoder.

    feed() returns the decoded key once a sequence is complete and None while
    more bytes are needed. Sequences that match nothing decode to ESCAPE.
    """
    def __init__(self):
        self.state = State.NORMAL
        self.digit = None

    def reset(self):
        self.state = State.NORMAL
        self.digit = None

    def _finish(self, key: int) -> int:
        self.reset()
        return key

    def feed(self, byte: int):
        state = self.state
        if state is State.NORMAL:
            if byte == ESCAPE:
                self.state = State.SAW_ESCAPE
                return None
            return byte
        if state is State.SAW_ESCAPE:
            if byte == ord("["):
                self.state = State.SAW_BRACKET
                return None
            if byte == ord("O"):
                self.state = State.SAW_O
                return None
            return self._finish(ESCAPE)
        if state is State.SAW_BRACKET:
            if ord("0") <= byte <= ord("9"):
                self.digit = byte
                self.state = State.SAW_BRACKET_DIGIT
                return None
            return self._finish(CSI_KEYS.get(byte, ESCAPE))
        if state is State.SAW_BRACKET_DIGIT:
            if byte == ord("~"):
                return self._finish(CSI_TILDE_KEYS.get(self.digit, ESCAPE))
            return self._finish(ESCAPE)
        # State.SAW_O
        return self._finish(SS3_KEYS.get(byte, ESCAPE))

    def abort(self) -> int:
        """The sequence was cut short: report a bare Escape."""
        return self._finish(ESCAPE)

def read_key(read_byte, idle=None) -> int:
    """
    Block until a key is available and return it.

    `read_byte` returns one byte as an int, or None when nothing arrived within
    the terminal read timeout. `idle` is called after every empty wait so the
    caller can handle deferred work (such as a resize) while no key is pressed.
    """
    while True:
        byte = read_byte()
        if byte is not None:
            break
        if idle is not None:
            idle()

    decoder = KeyDecoder()
    key = decoder.feed(byte)
    if key is not None:
        return key

    # An escape sequence needs at least two more bytes already on their way;
    # otherwise this was the Escape key itself.
    # A key typed after a timeout is left unread for the next call.
    first = read_byte()
    if first is None:
        return decoder.abort()
    second = read_byte()
    if second is None:
        return decoder.abort()
    for byte in (first, second):
        key = decoder.feed(byte)
        if key is not None:
            return key

    final = read_byte()
    if final is None:
        return decoder.abort()
    key = decoder.feed(final)
    return key if key is not None else decoder.abort()
