"""xray.errors

Central error types. All failures surface at the record store boundary;
the correlation engine itself raises none of these.
"""


class XRayError(Exception):
    """Base application error."""


class ConfigError(XRayError):
    """Raised when required configuration is missing or invalid."""


class StorageError(XRayError):
    """Raised when the record store cannot be read or written."""


class NotFound(XRayError):
    """Raised when a record ref does not exist in the store."""


class MalformedRecord(XRayError):
    """Raised when stored content does not parse into a StepRecord."""
