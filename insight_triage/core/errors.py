# File: insight_triage/core/errors.py


class InsightTriageError(Exception):
    """Base exception for everything raised by the triage workflow."""
    pass


class StorageError(InsightTriageError):
    """Reading or writing a collection failed, or the stored data is malformed."""
    pass


class NotFoundError(InsightTriageError):
    """
    Referenced insight is not staged.
    Soft error: the lifecycle service logs it and treats the call as a no-op.
    """
    pass


class DuplicateInsightError(InsightTriageError):
    """A freshly generated insight id already exists in one of the collections."""
    pass


class InvalidLabelError(InsightTriageError, ValueError):
    """A sentiment or topic value outside its closed enumeration."""
    pass


class ClassificationError(InsightTriageError):
    """The classification provider failed or returned an unusable suggestion."""
    pass


class ConfigurationError(InsightTriageError):
    """The classification provider credential is missing."""
    pass
