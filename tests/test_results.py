import re
import sys

import pytest

from bdd_junitkit.errors import LifecycleError
from bdd_junitkit.results import Failure, FailureKind, TestCase, TestSuite


def finished_case(name, *failures, skipped=False):
    tc = TestCase(name)
    tc.start()
    for f in failures:
        tc.append_failure(*f)
    if skipped:
        tc.mark_skipped()
    tc.finish()
    return tc


def test_failure_kind_predicates():
    failed = Failure(FailureKind.FAILED, "AssertionError", "nope")
    error = Failure(FailureKind.ERROR, "KeyError", "'x'")
    assert failed.is_failure and not failed.is_error
    assert error.is_error and not error.is_failure


def test_case_counts_and_predicates():
    tc = finished_case("c", ("failed", "A"), ("error", "B"), (FailureKind.FAILED, "C"))
    assert tc.failure_count == 2
    assert tc.error_count == 1
    assert tc.has_failure and tc.has_error
    assert not tc.is_skipped
    assert tc.time is not None and tc.time >= 0
    assert [f.name for f in tc.failures] == ["A", "B", "C"]


def test_case_rejects_unknown_kind():
    tc = TestCase("c")
    tc.start()
    with pytest.raises(ValueError):
        tc.append_failure("flaky", "X")


def test_suite_finish_derives_counts():
    suite = TestSuite("Login (uid:1)")
    suite.start(capture=False)
    suite.append_case(finished_case("passes"))
    suite.append_case(finished_case("fails", ("failed", "A"), ("failed", "B")))
    suite.append_case(finished_case("errors", ("error", "E")))
    suite.append_case(finished_case("skipped", skipped=True))
    suite.finish()

    assert suite.tests == len(suite.testcases) == 4
    assert suite.failures == 2
    assert suite.errors == 1
    assert suite.skipped == 1
    assert suite.assertions is None
    assert suite.time >= 0
    assert re.fullmatch(r"\d{4}-\d\d-\d\dT\d\d:\d\d:\d\d[+-]\d\d:\d\d", suite.timestamp)
    assert [tc.name for tc in suite.testcases] == ["passes", "fails", "errors", "skipped"]


def test_empty_suite_counts_are_zero():
    suite = TestSuite("Empty (uid:0)")
    suite.start(capture=False)
    suite.finish()
    assert (suite.tests, suite.failures, suite.errors, suite.skipped) == (0, 0, 0, 0)


def test_suite_name_is_stringified():
    assert TestSuite(42).name == "42"


def test_attribute_order():
    suite = TestSuite("s")
    assert [k for k, _ in suite.attributes()] == [
        "name", "tests", "time", "failures", "errors", "skipped", "assertions", "timestamp"]
    assert [k for k, _ in TestCase("c").attributes()] == ["name", "time", "assertions"]


def test_lifecycle_violations_fail_loudly():
    suite = TestSuite("s")
    with pytest.raises(LifecycleError):
        suite.finish()
    suite.start(capture=False)
    with pytest.raises(LifecycleError):
        suite.start(capture=False)

    open_case = TestCase("open")
    open_case.start()
    with pytest.raises(LifecycleError):
        suite.append_case(open_case)

    suite.finish()
    with pytest.raises(LifecycleError):
        suite.finish()
    with pytest.raises(LifecycleError):
        suite.append_case(finished_case("late"))

    tc = TestCase("c")
    with pytest.raises(LifecycleError):
        tc.finish()
    tc.start()
    tc.finish()
    with pytest.raises(LifecycleError):
        tc.append_failure("failed", "A")
    with pytest.raises(LifecycleError):
        tc.mark_skipped()
    with pytest.raises(LifecycleError):
        tc.finish()


def test_suite_captures_process_output():
    original_out, original_err = sys.stdout, sys.stderr
    suite = TestSuite("s")
    suite.start(capture=True)
    print("hello from a step")
    sys.stderr.write("warning: slow\n")
    suite.finish()

    assert sys.stdout is original_out
    assert sys.stderr is original_err
    assert suite.stdout == "hello from a step\n"
    assert suite.stderr == "warning: slow\n"


def test_capture_disabled_by_environment(monkeypatch):
    monkeypatch.setenv("CI_CAPTURE", "off")
    original_out = sys.stdout
    suite = TestSuite("s")
    suite.start()
    assert sys.stdout is original_out
    suite.finish()
    assert suite.stdout is None and suite.stderr is None


def test_capture_enabled_for_other_environment_values(monkeypatch):
    monkeypatch.setenv("CI_CAPTURE", "on")
    suite = TestSuite("s")
    suite.start()
    print("captured")
    suite.finish()
    assert suite.stdout == "captured\n"
