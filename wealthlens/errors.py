class AnalysisError(Exception):
    """Base class for analysis failures surfaced to callers."""


class InvalidInputError(AnalysisError, ValueError):
    """The snapshot handed to the engine is absent or not a mapping."""
