import pytest


class RecordingCanvas:
    """Canvas that remembers every call instead of drawing"""

    def __init__(self):
        self.calls = []

    def clear(self):
        self.calls.append(("clear",))

    def set_font(self, size):
        self.calls.append(("font", size))

    def draw_glyph(self, glyph, x, y):
        self.calls.append(("glyph", glyph, x, y))

    def draw_text(self, text, x, y, align="left"):
        self.calls.append(("text", text, x, y, align))

    def glyphs(self):
        return [c[1] for c in self.calls if c[0] == "glyph"]

    def texts(self):
        return [c[1] for c in self.calls if c[0] == "text"]


class FakeScheduler:
    def __init__(self):
        self.scheduled = []

    def schedule(self, func, interval):
        self.scheduled.append((func, interval))

    def unschedule(self, func):
        self.scheduled = [(f, i) for f, i in self.scheduled if f != func]


@pytest.fixture
def canvas():
    return RecordingCanvas()


@pytest.fixture
def scheduler():
    return FakeScheduler()
