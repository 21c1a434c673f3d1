"""Failure taxonomy of the reconciliation layer.

Two further outcomes are not exceptions:

- an extraction gap is a field left as ``None`` by the extractor;
- no confident match is a ``vector_only`` merged record.

``NetworkError`` and ``ParseError`` are raised by the enrichment client and are
always handled by the reconciliation cache. ``MissingLookupKeyError`` signals a
caller bug: identities without identifier and name must be short-circuited
before any catalog query.
"""

from __future__ import annotations


class ReconciliationError(RuntimeError):
    """Base class for errors raised inside the reconciliation layer."""


class NetworkError(ReconciliationError):
    """Transport or timeout failure while calling the catalog."""


class ParseError(ReconciliationError):
    """The catalog returned a body that cannot be decoded."""


class MissingLookupKeyError(ValueError):
    """A tile identity without identifier and name reached the catalog client."""
