"""Exceptions related to Data Access Objects (DAO) operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    ShortCodeTakenError:
        Raised when a short code is already assigned to a different long URL.

    DataStoreError:
        Raised when there is an error in the data store (e.g., connection issues, timeouts, OOM, etc.).

Example:
    >>> from shortlink.dao.exceptions import ShortCodeTakenError
    >>> raise ShortCodeTakenError("Short code 'aZ3kP9q' is already taken.")
    Traceback (most recent call last):
        ...
    shortlink.dao.exceptions.ShortCodeTakenError: Short code 'aZ3kP9q' is already taken.
"""


class DAOError(Exception):
    """Generic base class for DAO-related exceptions."""

    pass


class ShortCodeTakenError(DAOError):
    """Exception raised when a short code already belongs to another long URL."""

    pass


class DataStoreError(DAOError):
    """Exception raised when there is an error in the data store.

    e.g. connection issues, timeouts, OOM, etc.
    """

    pass
