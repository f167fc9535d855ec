"""
Ledger error types.

Client balance problems (unknown account, duplicate account)
are plain ValueErrors, the same as the rest of the services.
These classes cover the ledger's own failure modes.
"""


class LedgerError(Exception):
    """Base class for ledger failures."""


class LoadFailure(LedgerError):
    """The snapshot store could not be read or held corrupt data."""


class LedgerUnavailable(LedgerError):
    """The ledger has not finished loading, or its last load failed."""


class SnapshotError(LedgerError):
    """The snapshot store could not be written."""


class TransferFailed(LedgerError):
    """A transfer could not be applied to both accounts."""
