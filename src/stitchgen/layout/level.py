"""
Level container: placed chunks plus the open-context and open-chunk indices.

Indices are derived on demand from the chunks in insertion order, so they can never
go stale:
- find_open_contexts(): chunk insertion order, then per-chunk context order
- find_open_chunks(): chunks with at least one open context, insertion order

Both return fresh lists; mutating the level afterwards does not change a snapshot
already handed out.

Removing a chunk or a context re-opens the partner context on the neighbouring
chunk, so an aligned context always has a partner that is still in the level.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterator, List, Optional, Sequence

from ..errors import InvalidArgument, NotFoundError
from ..geometry import Shape, make_shape
from .data_model import Chunk, Context

logger = logging.getLogger(__name__)


class Level:
    """A generated level: ordered chunks and their context graph.

    Args:
        dimensions: 2 for Rectangle chunks, 3 for Box chunks
        bounds: Optional level extent starting at the origin; every chunk
            placed by the generator must lie within it
    """

    def __init__(self, dimensions: int = 2, bounds: Optional[Sequence[float]] = None):
        if dimensions not in (2, 3):
            raise InvalidArgument(f"Level must be 2D or 3D, got {dimensions}D")
        self.dimensions = dimensions
        self.bounds: Optional[Shape] = None
        if bounds is not None:
            if len(bounds) != dimensions:
                raise InvalidArgument(
                    f"Level bounds {tuple(bounds)} do not match a {dimensions}D level"
                )
            if any(b <= 0 for b in bounds):
                raise InvalidArgument(f"Level bounds must be positive, got {tuple(bounds)}")
            self.bounds = make_shape([0.0] * dimensions, bounds)
        self._chunks: Dict[str, Chunk] = {}

    # =========================================================================
    # Chunks
    # =========================================================================

    def add_chunk(self, chunk: Chunk) -> None:
        """Insert a chunk. Overlap checks are the generator's job."""
        if chunk is None:
            raise InvalidArgument("Chunk is required")
        if chunk.dimensions != self.dimensions:
            raise InvalidArgument(
                f"Cannot add a {chunk.dimensions}D chunk to a {self.dimensions}D level"
            )
        if chunk.id in self._chunks:
            raise InvalidArgument(f"Chunk {chunk!r} is already part of the level")
        self._chunks[chunk.id] = chunk

    def remove_chunk(self, chunk: Chunk) -> None:
        """Remove a chunk and all of its contexts, re-opening its neighbours.

        Raises:
            NotFoundError: If the chunk is not in the level
        """
        if chunk is None:
            raise InvalidArgument("Chunk is required")
        if self._chunks.get(chunk.id) is not chunk:
            raise NotFoundError(f"Chunk {chunk!r} is not part of the level")
        for context in chunk.contexts:
            partner = context._clear_target()
            if partner is not None:
                logger.debug(f"Re-opened context at {partner} after removing chunk at {chunk}")
        del self._chunks[chunk.id]

    def get_chunk(self, chunk_id: str) -> Chunk:
        try:
            return self._chunks[chunk_id]
        except KeyError:
            raise NotFoundError(f"No chunk with id {chunk_id}") from None

    @property
    def chunks(self) -> tuple:
        return tuple(self._chunks.values())

    @property
    def root(self) -> Optional[Chunk]:
        """The first chunk still in the level, None when empty."""
        return next(iter(self._chunks.values()), None)

    @property
    def size(self) -> float:
        """Summed area (2D) or volume (3D) of all chunks."""
        return sum(chunk.size for chunk in self._chunks.values())

    def __len__(self) -> int:
        return len(self._chunks)

    def __iter__(self) -> Iterator[Chunk]:
        return iter(list(self._chunks.values()))

    def __contains__(self, item) -> bool:
        if isinstance(item, Chunk):
            return self._chunks.get(item.id) is item
        if isinstance(item, Context):
            return item.chunk in self and item.chunk.owns(item)
        return False

    # =========================================================================
    # Contexts
    # =========================================================================

    def _require(self, context: Context) -> None:
        if context is None:
            raise InvalidArgument("Context is required")
        if context not in self:
            raise NotFoundError(f"Context at {context} is not part of the level")

    def remove_context(self, context: Context) -> None:
        """Remove a single context from its chunk, re-opening its partner.

        Raises:
            NotFoundError: If the context is not in the level
        """
        self._require(context)
        context.chunk._remove_context(context)

    def align(self, first: Context, second: Context) -> None:
        """Close two contexts of different chunks as a connected pair."""
        self._require(first)
        self._require(second)
        first._align_to(second)

    def block_context(self, context: Context) -> None:
        """Mark an open context as one the generator will not extend again."""
        self._require(context)
        context.blocked = True

    def find_open_contexts(self) -> List[Context]:
        return [
            context
            for chunk in self._chunks.values()
            for context in chunk.open_contexts()
        ]

    def find_processible_contexts(self) -> List[Context]:
        """Open contexts the generator may still try to extend."""
        return [context for context in self.find_open_contexts() if not context.blocked]

    def find_open_chunks(self) -> List[Chunk]:
        return [chunk for chunk in self._chunks.values() if chunk.has_open_contexts()]

    def aligned_pairs(self) -> List[tuple]:
        """Each aligned context pair once, in insertion order of the first chunk."""
        pairs = []
        seen = set()
        for chunk in self._chunks.values():
            for context in chunk.contexts:
                if context.target is None or id(context) in seen:
                    continue
                seen.add(id(context))
                seen.add(id(context.target))
                pairs.append((context, context.target))
        return pairs

    def __repr__(self) -> str:
        return (
            f"Level({self.dimensions}D, chunks={len(self)}, "
            f"open_contexts={len(self.find_open_contexts())})"
        )
