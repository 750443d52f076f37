class LifecycleError(RuntimeError):
    """A suite, case or capture was driven out of its start/finish order."""

class MissingUidTagError(LookupError):
    """A feature or scenario carries no ``uid`` tag to build its report name from."""

class ConfigError(ValueError):
    """A configuration or results file could not be read or validated."""
