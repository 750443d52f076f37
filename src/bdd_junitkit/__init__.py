# Lightweight package init: the model and renderer are imported on first use.
__all__ = ["TestSuite", "TestCase", "Failure", "FailureKind", "render_suite", "JUnitFeatureReporter"]

def __getattr__(name):
    if name in ("TestSuite", "TestCase", "Failure", "FailureKind"):
        from . import results
        return getattr(results, name)
    if name == "render_suite":
        from .reporters.junit import render_suite as _render_suite
        return _render_suite
    if name == "JUnitFeatureReporter":
        from .runners.feature_reporter import JUnitFeatureReporter as _JUnitFeatureReporter
        return _JUnitFeatureReporter
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
