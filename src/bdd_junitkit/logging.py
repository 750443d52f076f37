import logging, sys
from rich.console import Console
from rich.logging import RichHandler
def setup_logging(level: str = "INFO"):
    # Bind to the stream present now so captured suites never swallow our own log lines.
    console = Console(file=sys.stderr)
    logging.basicConfig(level=level, format="%(message)s", datefmt="[%X]", handlers=[RichHandler(console=console, rich_tracebacks=True)])
    return logging.getLogger("bdd_junitkit")
