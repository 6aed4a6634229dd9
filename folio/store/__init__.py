"""Filesystem access to raw content documents."""

from folio.store.store import DocumentStore

__all__ = ["DocumentStore"]
