from typing import Any, List, Optional, Tuple, Union
from pathlib import Path
import logging, traceback

from ..config import ReporterConfig, load_config
from ..errors import LifecycleError, MissingUidTagError
from ..results import FailureKind, TestCase, TestSuite
from ..reporters.console import ConsoleReporter
from ..reporters.junit import JUnitReporter
from ..utils.artifacts import ReportManager

logger = logging.getLogger(__name__)

def _field(item: Any, key: str) -> Any:
    return item[key] if isinstance(item, dict) else getattr(item, key)

def generate_name(item: Any) -> str:
    """``"<name> (uid:N)"`` from the item's first ``uid`` tag."""
    tags = _field(item, "tags") or []
    uid = next((t for t in tags if t.startswith("uid")), None)
    if uid is None:
        raise MissingUidTagError(f"no uid tag on {_field(item, 'name')!r} (tags: {list(tags)})")
    return f"{_field(item, 'name')} ({uid.replace('-', ':')})"

def describe_failure(failure: Any, step_location: Optional[str] = None) -> Tuple[str, str, str]:
    """(name, message, location) of a step failure; the traceback wins over the step location."""
    if not isinstance(failure, BaseException):
        return "Failure", str(failure), step_location or ""
    tb = traceback.format_tb(failure.__traceback__) if failure.__traceback__ else []
    location = "\n".join(frame.rstrip("\n") for frame in tb)
    return type(failure).__name__, str(failure), location or step_location or ""

class JUnitFeatureReporter:
    """
    Lifecycle adapter for a BDD runner: one TestSuite per feature, one TestCase per scenario.
    Each finished feature is rendered and written through the report manager.
    """
    def __init__(self, config: Optional[ReporterConfig] = None, manager: Optional[ReportManager] = None,
                 write_reports: bool = True):
        self.config = config or load_config()
        self.junit: Optional[JUnitReporter] = None
        if write_reports:
            manager = manager or ReportManager(self.config.report_prefix, self.config.report_dir)
            self.junit = JUnitReporter(manager, wrapped=self.config.wrapped, indent=self.config.indent)
        self.console = ConsoleReporter() if self.config.console else None
        self.test_suite: Optional[TestSuite] = None
        self.test_case: Optional[TestCase] = None
        self.suites: List[TestSuite] = []
        self.reports: List[Path] = []

    def before_feature_run(self, feature: Any) -> TestSuite:
        if self.test_suite is not None:
            raise LifecycleError(f"feature {self.test_suite.name!r} is still running")
        self.test_suite = TestSuite(generate_name(feature))
        self.test_suite.start(capture=self.config.capture)
        return self.test_suite

    def before_scenario_run(self, scenario: Any, step_definitions: Any = None) -> TestCase:
        self._suite()
        if self.test_case is not None:
            raise LifecycleError(f"scenario {self.test_case.name!r} is still running")
        self.test_case = TestCase(generate_name(scenario))
        self.test_case.start()
        return self.test_case

    def record_failure(self, kind: Union[FailureKind, str], name: str, message: str = "", location: str = ""):
        return self._case().append_failure(kind, name, message, location)

    def on_undefined_step(self, step: Any, failure: Any, step_definitions: Any = None):
        return self.record_failure(FailureKind.ERROR, *describe_failure(failure))

    def on_failed_step(self, step: Any, failure: Any, step_location: Optional[str] = None, step_definitions: Any = None):
        return self.record_failure(FailureKind.FAILED, *describe_failure(failure, step_location))

    def on_error_step(self, step: Any, failure: Any, step_location: Optional[str] = None, step_definitions: Any = None):
        return self.record_failure(FailureKind.ERROR, *describe_failure(failure, step_location))

    def on_skipped_scenario(self, scenario: Any = None) -> None:
        self._case().mark_skipped()

    def after_scenario_run(self, scenario: Any = None, step_definitions: Any = None) -> TestCase:
        tc = self._case()
        tc.finish()
        self._suite().append_case(tc)
        self.test_case = None
        return tc

    def after_feature_run(self, feature: Any = None) -> Optional[Path]:
        suite = self._suite()
        if self.test_case is not None:
            raise LifecycleError(f"scenario {self.test_case.name!r} was never finished")
        suite.finish()
        self.test_suite = None
        self.suites.append(suite)
        if suite.failures or suite.errors:
            logger.warning("%s: %d failures, %d errors", suite.name, suite.failures, suite.errors)
        if self.console:
            self.console.emit(suite)
        if self.junit is None:
            return None
        path = self.junit.emit(suite)
        self.reports.append(path)
        return path

    def _suite(self) -> TestSuite:
        if self.test_suite is None:
            raise LifecycleError("no feature is running")
        return self.test_suite

    def _case(self) -> TestCase:
        if self.test_case is None:
            raise LifecycleError("no scenario is running")
        return self.test_case
