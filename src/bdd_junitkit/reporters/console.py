from ..results import TestCase, TestSuite

def case_status(c: TestCase) -> str:
    if c.is_skipped: return "SKIP"
    if c.has_error: return "ERROR"
    return "FAIL" if c.has_failure else "PASS"

class ConsoleReporter:
    def emit(self, suite: TestSuite) -> None:
        print(f"Feature: {suite.name}")
        for c in suite.testcases:
            print(f" - {c.name}: {case_status(c)}")
        print(f"   {suite.tests} tests, {suite.failures} failures, {suite.errors} errors, {suite.skipped} skipped ({suite.time:.3f}s)")
