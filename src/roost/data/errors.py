"""Errors from ``roost.data``.

Binding lets these propagate untouched, so a store failure during a
lookup is a 500, never a 404.
"""

from roost.errors import RoostError


class DataError(RoostError):
    pass


class DriverNotInstalledError(DataError):
    """The URL needs a driver extra (``roost[data-pg]``) that isn't installed."""


class QueryError(DataError):
    """A statement failed; the message ends with the SQL in brackets."""
