"""Application-level exception types.

Convention:
- ``BootstrapError``: the content store could not be opened or migrated at
  startup. Fatal to rendering: every page shows a plaintext error instead of
  content and public operations refuse to run (HTTP 503).
- ``StoreError``: a statement against the content database failed (bad SQL,
  constraint or I/O failure). Propagated to whoever issued the statement.
- ``PersistError``: the blob store could not save the database image. Logged
  by callers; the in-memory store is never rolled back.
- ``DecodeError``: a stored block payload is not a JSON object. Callers
  substitute an empty payload and keep rendering.
"""

from __future__ import annotations


class BootstrapError(RuntimeError):
    """Raised when the content store cannot be initialized."""


class StoreError(RuntimeError):
    """Raised when a query or mutation against the content store fails."""


class PersistError(OSError):
    """Raised when the serialized database cannot be written to the blob store."""


class DecodeError(ValueError):
    """Raised when a block payload cannot be decoded into a JSON object."""
