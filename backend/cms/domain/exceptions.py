class CMSError(Exception):
    """Base class for every error raised by the page repository."""


class ConfigurationError(CMSError):
    """
    A page type, field type or loader option was set up incorrectly.

    These indicate a bug in a schema definition rather than bad data, so they
    are raised as soon as the schema is built and never swallowed.
    """


class InvariantViolation(CMSError):
    pass


class NestedSetError(InvariantViolation):
    """A tree insert or move could not be applied."""

    def __init__(self, message, *, page_id=None, target_id=None):
        super().__init__(message)
        self.page_id = page_id
        self.target_id = target_id


class ValidationError(CMSError):
    def __init__(self, message, errors=None):
        super().__init__(message)
        self.errors = errors or {}


class InvalidContent(ValidationError):
    """Page content does not have the shape needed to process comments."""
