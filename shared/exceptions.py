"""
Exceptions
==========

Error hierarchy shared by the DCR services.

Version: 0.1.0
"""


class DcrError(Exception):
    """Base class for distributed-dcr errors."""


class DecodeError(DcrError):
    """A constraint document could not be decoded."""


class RepositoryError(DcrError):
    """The remote graph repository returned an unusable response."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
