class ConfigurationError(ValueError):
    """A malformed test definition or run configuration.

    Distinct from a failed test: it is raised out of execution and aborts the
    enclosing run instead of being reported as a failure.
    """
