"""Exceptions raised by the spent stores.

Storage faults surface as ``sqlite3.Error`` unchanged; these cover the
constraint failures callers are expected to report back to the user.
"""


class SpentError(Exception):
    """Base class for ledger constraint errors."""


class NotFoundError(SpentError):
    """The addressed container or transaction does not exist."""


class DuplicateNameError(SpentError):
    """A container or category with this name already exists."""


class ProtectedResourceError(SpentError):
    """The operation targets a resource that cannot be removed."""


class InvalidAmountError(SpentError):
    """The amount does not fit in the ledger's integer cents column."""
