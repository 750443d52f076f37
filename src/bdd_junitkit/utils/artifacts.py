import hashlib, logging, os, pathlib, re
from typing import Optional, Set
from ..config import REPORTS_ENV

logger = logging.getLogger(__name__)

MAX_FILENAME_SIZE = 240
SUFFIX = "xml"

class ReportManager:
    """Chooses report file names under one directory and writes rendered reports there."""

    def __init__(self, prefix: str = "features", base_dir: Optional[str] = None):
        self.prefix = prefix
        base = base_dir or os.environ.get(REPORTS_ENV) or pathlib.Path.cwd() / prefix.lower() / "reports"
        self.base_dir = pathlib.Path(base)
        self.base_dir.mkdir(parents=True, exist_ok=True)
        self._written: Set[pathlib.Path] = set()

    def basename_for(self, name: str) -> str:
        basename = f"{self.prefix.upper()}-{re.sub(r'[^a-zA-Z0-9]+', '-', name)}"
        limit = MAX_FILENAME_SIZE - len(SUFFIX) - 1
        if len(basename) > limit:
            digest = hashlib.sha1(basename.encode("utf-8")).hexdigest()[:8]
            basename = f"{basename[:limit - len(digest) - 1]}-{digest}"
        return basename

    def filename_for(self, suite) -> pathlib.Path:
        basename = self.basename_for(suite.name)
        path = self.base_dir / f"{basename}.{SUFFIX}"
        n = 0
        while path in self._written:
            n += 1
            path = self.base_dir / f"{basename}-{n}.{SUFFIX}"
        return path

    def write_report(self, suite, data: bytes) -> pathlib.Path:
        path = self.filename_for(suite)
        path.write_bytes(data)
        self._written.add(path)
        logger.info("JUnit report written: %s", path)
        return path
