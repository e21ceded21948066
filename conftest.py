import collections

import pytest

from tte import buffer, config, logger
from tte.__main__ import EditorContext

class FakeTerminal:
    """Scripted stand-in for tte.terminal.Terminal."""
    def __init__(self, rows=24, cols=80, data=b""):
        self.rows = rows
        self.cols = cols
        self.input = collections.deque(data)
        self.output = bytearray()
        self.frames = []
        self.empty_reads = 0

    def feed(self, data: bytes):
        self.input.extend(data)

    def get_size(self):
        return self.rows, self.cols

    def read_byte(self):
        if self.input:
            self.empty_reads = 0
            return self.input.popleft()
        self.empty_reads += 1
        if self.empty_reads > 50:
            raise AssertionError("test ran out of scripted input")
        return None

    def write(self, data: bytes):
        self.output += data
        self.frames.append(bytes(data))

@pytest.fixture(autouse=True)
def no_logging(monkeypatch):
    monkeypatch.setattr(logger, "LOG_FILE_PATH", None)

@pytest.fixture
def make_context():
    def _make(rows=None, filename=None, term_rows=24, term_cols=80, data=b"", **settings):
        terminal = FakeTerminal(term_rows, term_cols, data)
        context = EditorContext(terminal, config.Settings(log_file="", **settings))
        if rows is not None or filename is not None:
            context.buffer = buffer.Buffer(filename, rows or [])
        return context
    return _make
