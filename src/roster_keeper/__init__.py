"""roster_keeper: an in-memory roster with undoable adds and a background task worker."""

__version__ = "0.1.0"
