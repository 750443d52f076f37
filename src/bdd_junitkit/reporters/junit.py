from pathlib import Path
from typing import Optional
import logging
import xml.etree.ElementTree as ET
from ..errors import LifecycleError
from ..results import TestCase, TestSuite
from ..utils.artifacts import ReportManager
from ..utils.text import as_text, clean_attributes, truncate_at_newline, xml_safe

logger = logging.getLogger(__name__)

def _testcase(parent: ET.Element, tc: TestCase) -> None:
    el = ET.SubElement(parent, "testcase", dict(clean_attributes(tc.attributes())))
    if tc.is_skipped:
        ET.SubElement(el, "skipped")
        return
    for f in tc.failures:
        tag = "error" if f.is_error else "failure"
        child = ET.SubElement(el, tag, {"type": xml_safe(truncate_at_newline(f.name)), "message": xml_safe(truncate_at_newline(f.message))})
        child.text = xml_safe(f"{f.message} ({f.name})\n{f.location}")

def _output(parent: ET.Element, tag: str, text: Optional[str]) -> None:
    if as_text(text):
        ET.SubElement(parent, tag).text = xml_safe(text)

def build_tree(suite: TestSuite, wrapped: bool = False) -> ET.Element:
    if not suite.is_finished:
        raise LifecycleError(f"test suite {suite.name!r} must finish before it is rendered")
    root = ET.Element("testsuites") if wrapped else None
    attrs = dict(clean_attributes(suite.attributes()))
    testsuite = ET.SubElement(root, "testsuite", attrs) if root is not None else ET.Element("testsuite", attrs)
    for tc in suite.testcases:
        _testcase(testsuite, tc)
    _output(testsuite, "system-out", suite.stdout)
    _output(testsuite, "system-err", suite.stderr)
    return root if root is not None else testsuite

def render_suite(suite: TestSuite, wrapped: bool = False, indent: int = 2) -> bytes:
    """Render a finished suite as a UTF-8 JUnit XML document."""
    root = build_tree(suite, wrapped)
    ET.indent(root, space=" " * indent)
    return ET.tostring(root, encoding="utf-8", xml_declaration=True) + b"\n"

class JUnitReporter:
    def __init__(self, manager: ReportManager, wrapped: bool = False, indent: int = 2):
        self.manager = manager
        self.wrapped = wrapped
        self.indent = indent
    def emit(self, suite: TestSuite) -> Path:
        return self.manager.write_report(suite, render_suite(suite, self.wrapped, self.indent))
