import io
import sys
from typing import Callable, TextIO

from ..errors import LifecycleError

Assign = Callable[[TextIO], None]

class OutputCapture:
    """Redirects a process stream into an in-memory buffer until ``finish``."""

    def __init__(self, original: TextIO, assign: Assign):
        self.original = original
        self.buffer = io.StringIO()
        self._assign = assign
        self._finished = False
        assign(self.buffer)

    @classmethod
    def wrap(cls, stream: TextIO, assign: Assign) -> "OutputCapture":
        return cls(stream, assign)

    @classmethod
    def stdout(cls) -> "OutputCapture":
        return cls.wrap(sys.stdout, lambda s: setattr(sys, "stdout", s))

    @classmethod
    def stderr(cls) -> "OutputCapture":
        return cls.wrap(sys.stderr, lambda s: setattr(sys, "stderr", s))

    def finish(self) -> str:
        if self._finished:
            raise LifecycleError("output capture already finished")
        self._finished = True
        self._assign(self.original)
        return self.buffer.getvalue()
