# errors.py
"""Exceptions raised by the territory map editor core."""


class TerritoryMapError(Exception):
    """Base class for all editor errors."""


class ValidationError(TerritoryMapError):
    """A user action or an imported document breaks a model rule."""


class ParseError(TerritoryMapError):
    """An imported document is not valid JSON."""


class StorageError(TerritoryMapError):
    """The persistent key-value store could not be written."""


class ConfirmationError(TerritoryMapError):
    """A confirmation token is unknown or was already settled."""
