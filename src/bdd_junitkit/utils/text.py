from typing import Any, Iterable, List, Optional, Tuple
import re

ELLIPSIS = "..."
# anything outside the XML 1.0 Char production
_NON_XML_CHAR = re.compile(r"[^\t\n\r\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")

def as_text(value: Any) -> str:
    return "" if value is None else str(value)

def xml_safe(value: Any) -> str:
    """Replace characters XML 1.0 cannot carry (ANSI escapes and other controls) with ``*``."""
    return _NON_XML_CHAR.sub("*", as_text(value))

def format_seconds(value: Optional[float]) -> Optional[str]:
    return None if value is None else f"{value:.6f}"

def truncate_at_newline(value: Any) -> str:
    """Cut ``value`` at its first newline, marking the cut with an ellipsis."""
    txt = as_text(value)
    head, sep, _ = txt.partition("\n")
    return head + ELLIPSIS if sep else txt

def clean_attributes(pairs: Iterable[Tuple[str, Any]]) -> List[Tuple[str, str]]:
    """Drop empty attributes and truncate multi-line ones, keeping order."""
    return [(k, xml_safe(truncate_at_newline(v))) for k, v in pairs if as_text(v) != ""]
