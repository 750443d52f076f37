from pydantic import BaseModel, Field, ValidationError
from typing import Mapping, Optional
import os, yaml, pathlib

from .errors import ConfigError

CAPTURE_ENV = "CI_CAPTURE"
REPORTS_ENV = "CI_REPORTS"

def capture_enabled(env: Optional[Mapping[str, str]] = None) -> bool:
    env = os.environ if env is None else env
    return env.get(CAPTURE_ENV) != "off"

class ReporterConfig(BaseModel):
    capture: bool = Field(True, description="Capture stdout/stderr into system-out/system-err")
    wrapped: bool = Field(False, description="Wrap the testsuite in a testsuites element")
    report_dir: Optional[str] = Field(None, description="Directory for XML reports")
    report_prefix: str = Field("features", description="Report type name, used in file names")
    indent: int = Field(2, ge=0)
    console: bool = Field(False, description="Print a summary per finished suite")

def read_yaml(path: str) -> dict:
    try:
        data = yaml.safe_load(pathlib.Path(path).read_text())
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"{path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: expected a mapping at top level")
    return data

def load_config(path: Optional[str] = None, env: Optional[Mapping[str, str]] = None) -> ReporterConfig:
    data = read_yaml(path) if path else {}
    env = os.environ if env is None else env
    if not capture_enabled(env):
        data["capture"] = False
    if env.get(REPORTS_ENV):
        data["report_dir"] = env[REPORTS_ENV]
    try:
        return ReporterConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"{path or '<environment>'}: {e}") from e
