"""Domain-level exceptions.

Expected per-item conditions (insufficient stock, shortages, missing
inventory) are reported as data by the planners, never raised.  The
exceptions below are reserved for invalid calls and infrastructure
failures, so the CLI layer can catch them uniformly.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A call argument or business rule was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity (usually an inventory snapshot) does not exist."""


class StorageError(Exception):
    """The underlying store could not be read or written."""
