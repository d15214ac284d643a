"""Persistence layer errors."""


class PersistenceError(Exception):
    """Base persistence error."""

    pass


class StorageUnavailableError(PersistenceError):
    """Raised when the database cannot be reached or drops the connection."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"Storage unavailable: {detail}")
