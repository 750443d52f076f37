from typing import Optional
import typer
from .config import load_config
from .errors import ConfigError, MissingUidTagError
from .logging import setup_logging
from .reporters.junit import render_suite
from .runners.feature_reporter import JUnitFeatureReporter
from .runners.replay import load_results, replay

app = typer.Typer(add_completion=False, help="BDD JUnitKit - JUnit XML reports from feature/scenario results")

def _load(results: str, config: Optional[str]):
    try:
        return load_results(results), load_config(config)
    except ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=2)

def _replay(data, reporter: JUnitFeatureReporter):
    try:
        return replay(data, reporter)
    except MissingUidTagError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=2)

@app.command()
def convert(
    results: str = typer.Argument(..., help="Results file (YAML or JSON) with features/scenarios/steps"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to reporter config YAML"),
    output_dir: Optional[str] = typer.Option(None, "--out", "-o", help="Directory for XML reports"),
    wrapped: bool = typer.Option(False, "--wrapped", help="Wrap each report in <testsuites>"),
    prefix: Optional[str] = typer.Option(None, "--prefix", help="Report type name used in file names"),
    console: bool = typer.Option(False, "--console", help="Print a summary per feature"),
    log_level: str = typer.Option("WARNING", "--log-level", help="Logging level"),
):
    setup_logging(log_level)
    data, cfg = _load(results, config)
    overrides = {k: v for k, v in {"report_dir": output_dir, "report_prefix": prefix}.items() if v is not None}
    overrides.update(wrapped=wrapped or cfg.wrapped, console=console or cfg.console)
    # replayed results have nothing to capture
    cfg = cfg.model_copy(update={**overrides, "capture": False})
    reporter = JUnitFeatureReporter(cfg)
    for path in _replay(data, reporter):
        typer.echo(str(path))
    failed = sum(s.failures for s in reporter.suites)
    errors = sum(s.errors for s in reporter.suites)
    tests = sum(s.tests for s in reporter.suites)
    typer.echo(f"Done. {len(reporter.suites)} features, {tests} scenarios, {failed} failures, {errors} errors.")
    raise typer.Exit(code=0 if failed == 0 and errors == 0 else 1)

@app.command()
def show(
    results: str = typer.Argument(..., help="Results file (YAML or JSON)"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to reporter config YAML"),
    wrapped: bool = typer.Option(False, "--wrapped", help="Wrap each report in <testsuites>"),
    log_level: str = typer.Option("WARNING", "--log-level", help="Logging level"),
):
    setup_logging(log_level)
    data, cfg = _load(results, config)
    cfg = cfg.model_copy(update={"capture": False, "console": False})
    reporter = JUnitFeatureReporter(cfg, write_reports=False)
    _replay(data, reporter)
    for suite in reporter.suites:
        typer.echo(render_suite(suite, wrapped or cfg.wrapped, cfg.indent).decode("utf-8"), nl=False)
