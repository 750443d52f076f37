"""
Result model for one feature run: a suite of scenario test cases and their recorded failures.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, List, Optional, Tuple, Union
import logging

from .config import capture_enabled
from .errors import LifecycleError
from .utils.capture import OutputCapture
from .utils.text import format_seconds

logger = logging.getLogger(__name__)


class FailureKind(Enum):
    FAILED = "failed"
    ERROR = "error"


@dataclass(frozen=True)
class Failure:
    """One failed, errored or undefined step within a test case."""
    kind: FailureKind
    name: str
    message: str = ""
    location: str = ""

    @property
    def is_failure(self) -> bool:
        return self.kind is FailureKind.FAILED

    @property
    def is_error(self) -> bool:
        return self.kind is FailureKind.ERROR


@dataclass
class TestCase:
    """A single scenario. Times itself between ``start`` and ``finish``."""
    name: str
    time: Optional[float] = None
    assertions: Optional[int] = None
    failures: List[Failure] = field(default_factory=list)
    skipped: bool = False
    _start: Optional[datetime] = field(default=None, init=False, repr=False)
    _finished: bool = field(default=False, init=False, repr=False)

    __test__ = False  # not a pytest class

    def start(self) -> None:
        if self._start is not None:
            raise LifecycleError(f"test case {self.name!r} already started")
        self._start = datetime.now()

    def finish(self) -> None:
        if self._start is None:
            raise LifecycleError(f"test case {self.name!r} finished before start")
        if self._finished:
            raise LifecycleError(f"test case {self.name!r} already finished")
        self.time = (datetime.now() - self._start).total_seconds()
        self._finished = True

    def append_failure(self, kind: Union[FailureKind, str], name: str, message: str = "", location: str = "") -> Failure:
        self._check_open("append a failure to")
        failure = Failure(FailureKind(kind), name, message or "", location or "")
        self.failures.append(failure)
        return failure

    def mark_skipped(self) -> None:
        self._check_open("skip")
        self.skipped = True

    def _check_open(self, action: str) -> None:
        if self._finished:
            raise LifecycleError(f"cannot {action} finished test case {self.name!r}")

    @property
    def is_finished(self) -> bool:
        return self._finished

    @property
    def has_failure(self) -> bool:
        return any(f.is_failure for f in self.failures)

    @property
    def has_error(self) -> bool:
        return any(f.is_error for f in self.failures)

    @property
    def failure_count(self) -> int:
        return sum(1 for f in self.failures if f.is_failure)

    @property
    def error_count(self) -> int:
        return sum(1 for f in self.failures if f.is_error)

    @property
    def is_skipped(self) -> bool:
        return self.skipped

    def attributes(self) -> List[Tuple[str, Any]]:
        return [("name", self.name), ("time", format_seconds(self.time)), ("assertions", self.assertions)]


@dataclass
class TestSuite:
    """
    One feature run. Counts are derived from ``testcases`` when the suite finishes;
    stdout/stderr hold whatever the process printed between ``start`` and ``finish``.
    """
    name: str
    tests: Optional[int] = None
    time: Optional[float] = None
    failures: Optional[int] = None
    errors: Optional[int] = None
    skipped: Optional[int] = None
    assertions: Optional[int] = None
    timestamp: Optional[str] = None
    testcases: List[TestCase] = field(default_factory=list)
    stdout: Optional[str] = None
    stderr: Optional[str] = None
    _start: Optional[datetime] = field(default=None, init=False, repr=False)
    _finished: bool = field(default=False, init=False, repr=False)
    _capture_out: Optional[OutputCapture] = field(default=None, init=False, repr=False)
    _capture_err: Optional[OutputCapture] = field(default=None, init=False, repr=False)

    __test__ = False

    def __post_init__(self):
        self.name = str(self.name)

    def start(self, capture: Optional[bool] = None) -> None:
        """Start timing; capture stdout/stderr unless disabled (``None`` defers to ``CI_CAPTURE``)."""
        if self._start is not None:
            raise LifecycleError(f"test suite {self.name!r} already started")
        self._start = datetime.now().astimezone()
        if capture is None:
            capture = capture_enabled()
        logger.debug("suite %r started (capture=%s)", self.name, capture)
        if capture:
            self._capture_out = OutputCapture.stdout()
            self._capture_err = OutputCapture.stderr()

    def append_case(self, case: TestCase) -> None:
        if self._finished:
            raise LifecycleError(f"cannot append to finished test suite {self.name!r}")
        if not case.is_finished:
            raise LifecycleError(f"test case {case.name!r} must finish before it is appended")
        self.testcases.append(case)

    def finish(self) -> None:
        if self._start is None:
            raise LifecycleError(f"test suite {self.name!r} finished before start")
        if self._finished:
            raise LifecycleError(f"test suite {self.name!r} already finished")
        self.tests = len(self.testcases)
        self.time = (datetime.now().astimezone() - self._start).total_seconds()
        self.timestamp = self._start.isoformat(timespec="seconds")
        self.failures = sum(tc.failure_count for tc in self.testcases)
        self.errors = sum(tc.error_count for tc in self.testcases)
        self.skipped = sum(1 for tc in self.testcases if tc.is_skipped)
        # stderr is restored first: it was wrapped last
        if self._capture_err is not None:
            self.stderr = self._capture_err.finish()
        if self._capture_out is not None:
            self.stdout = self._capture_out.finish()
        self._finished = True
        logger.debug("suite %r finished: %d tests, %d failures, %d errors, %d skipped",
                     self.name, self.tests, self.failures, self.errors, self.skipped)

    @property
    def is_finished(self) -> bool:
        return self._finished

    def attributes(self) -> List[Tuple[str, Any]]:
        return [("name", self.name), ("tests", self.tests), ("time", format_seconds(self.time)),
                ("failures", self.failures), ("errors", self.errors), ("skipped", self.skipped),
                ("assertions", self.assertions), ("timestamp", self.timestamp)]
