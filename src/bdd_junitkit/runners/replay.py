"""
Replay a recorded results file (YAML or JSON) through the feature reporter.
"""

from pydantic import BaseModel, Field, ValidationError
from typing import List, Literal, Optional
from pathlib import Path
import logging

from ..config import read_yaml
from ..errors import ConfigError
from ..results import FailureKind
from .feature_reporter import JUnitFeatureReporter

logger = logging.getLogger(__name__)

StepStatus = Literal["passed", "failed", "error", "undefined", "skipped", "pending"]

class StepRecord(BaseModel):
    name: str
    status: StepStatus = "passed"
    exception: str = Field("", description="Exception class name of a failed/errored step")
    message: str = ""
    location: str = Field("", description="Backtrace or feature file location")

class ScenarioRecord(BaseModel):
    name: str
    tags: List[str] = Field(default_factory=list)
    skipped: bool = False
    steps: List[StepRecord] = Field(default_factory=list)

class FeatureRecord(BaseModel):
    name: str
    tags: List[str] = Field(default_factory=list)
    scenarios: List[ScenarioRecord] = Field(default_factory=list)

class ResultsFile(BaseModel):
    features: List[FeatureRecord] = Field(default_factory=list)

def load_results(path: str) -> ResultsFile:
    data = read_yaml(path)
    try:
        return ResultsFile.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"{path}: {e}") from e

def _replay_step(reporter: JUnitFeatureReporter, step: StepRecord) -> None:
    if step.status == "failed":
        reporter.record_failure(FailureKind.FAILED, step.exception or "AssertionError", step.message, step.location)
    elif step.status == "error":
        reporter.record_failure(FailureKind.ERROR, step.exception or "Error", step.message, step.location)
    elif step.status == "undefined":
        reporter.record_failure(FailureKind.ERROR, step.exception or "UndefinedStep",
                                step.message or f"Undefined step: {step.name}", step.location)

def replay(results: ResultsFile, reporter: JUnitFeatureReporter) -> List[Optional[Path]]:
    """Drive the reporter through every feature in order; returns the written report paths."""
    written = []
    for feature in results.features:
        reporter.before_feature_run(feature)
        for scenario in feature.scenarios:
            reporter.before_scenario_run(scenario)
            if scenario.skipped:
                reporter.on_skipped_scenario(scenario)
            else:
                for step in scenario.steps:
                    _replay_step(reporter, step)
            reporter.after_scenario_run(scenario)
        written.append(reporter.after_feature_run(feature))
        logger.debug("replayed feature %r (%d scenarios)", feature.name, len(feature.scenarios))
    return written
