"""
Exception types shared by the stores, the services and the transports.

Stores raise ``StoreReadError``/``StoreWriteError`` for anything that
goes wrong on disk.  Services translate those into the two failures the
transports care about: ``ValidationFailure`` (client error, HTTP 400,
message shown to the caller) and ``PersistenceFailure`` (server error,
HTTP 500, message kept generic).
"""


class ClinicError(Exception):
    """Base class for all errors raised by the clinic API."""


class StoreError(ClinicError):
    """A record store could not be accessed."""

    def __init__(self, name: str, message: str) -> None:
        super().__init__(f"{name}: {message}")
        self.name = name


class StoreReadError(StoreError):
    """The store file exists but cannot be read."""


class StoreCorruptError(StoreReadError):
    """The store file was read but does not hold a JSON array."""


class StoreWriteError(StoreError):
    """The store file could not be written."""


class ValidationFailure(ClinicError, ValueError):
    """The submitted payload failed validation.

    ``str(exc)`` is the human‑readable reason, e.g. ``"name is required"``.
    """


class PersistenceFailure(ClinicError):
    """Reading or writing a store failed while serving a request."""
