"""Errors raised by editor sessions to their callers."""


class EditorError(Exception):
    """Base class for caller-visible session errors."""


class DocumentValidationError(EditorError):
    """A required value is missing. Raised before any network call."""


class BackupTargetError(DocumentValidationError):
    """No backup target was selected."""


class OperationInProgressError(EditorError):
    """A load, save or delete is already running for this session."""
