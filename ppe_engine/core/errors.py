# ================================
# ppe_engine/core/errors.py
# ================================


class PPEEngineError(Exception):
    """Base class for fixed-asset engine failures."""


class InvalidAssetError(PPEEngineError, ValueError):
    """Asset data that is not a valid accounting state (negative cost, bad dates)."""


class FetchError(PPEEngineError):
    """The asset store could not be read."""


class PersistError(PPEEngineError):
    """The asset store rejected a write."""


class UnbalancedEntryError(PPEEngineError):
    """A generated set of journal entries does not balance."""

# ================================
# END errors.py
# ================================
