"""Port definitions for catalog enrichment."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from haloinfo.domain.model import RemoteDetailRecord, TileIdentity


@runtime_checkable
class CandidateFetcher(Protocol):
    """Async callable returning catalog candidates for one tile identity.

    Implementations raise ``NetworkError`` on transport failures and
    ``ParseError`` on undecodable responses; empty results are an empty list.
    """

    async def __call__(self, identity: TileIdentity) -> Sequence[RemoteDetailRecord]: ...
