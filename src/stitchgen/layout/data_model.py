"""
Data model for stitched levels.

Defines the core data structures:
- ContextDefinition / AnchorDefinition: relative layout entries of a template
- ChunkTemplate: immutable blueprint (extent, contexts, anchors, weight, tag)
- Context: directed connection point on a placed chunk
- Anchor: placeholder for game content filled after generation
- Chunk: a placed, rotated copy of a template with world-space bounds

Coordinates:
- Template offsets are relative to the template's min corner
- A chunk's position is the min corner of its (rotated) bounds
- Context and anchor positions on a chunk are absolute world positions

State changes that affect a level's indices (aligning, blocking, removing contexts)
are routed through Level, never performed on chunks directly by callers.
"""

from __future__ import annotations

import math
import uuid
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence, Tuple

from ..errors import InvalidArgument, InvalidOperation, NotFoundError
from ..geometry import (
    Direction,
    Shape,
    make_shape,
    rotate_direction,
    rotate_extent,
    rotate_offset,
)


def _as_point(values: Sequence[float], what: str) -> Tuple[float, ...]:
    if values is None:
        raise InvalidArgument(f"{what} is required")
    point = tuple(float(v) for v in values)
    if len(point) not in (2, 3):
        raise InvalidArgument(f"{what} must have 2 or 3 components, got {len(point)}")
    if not all(math.isfinite(v) for v in point):
        raise InvalidArgument(f"{what} must be finite, got {point}")
    return point


def _format_point(point: Sequence[float]) -> str:
    return "(" + ", ".join(f"{v:g}" for v in point) + ")"


# =============================================================================
# TEMPLATES
# =============================================================================

@dataclass(frozen=True)
class ContextDefinition:
    """Connection point of a template, relative to the template's min corner."""
    offset: Tuple[float, ...]
    direction: Direction
    tag: str = ""

    def __post_init__(self):
        object.__setattr__(self, 'offset', _as_point(self.offset, "Context offset"))
        object.__setattr__(self, 'direction', Direction.parse(self.direction))
        if self.tag is None:
            raise InvalidArgument("Context tag must not be None")


@dataclass(frozen=True)
class AnchorDefinition:
    """Content placeholder of a template, relative to the template's min corner."""
    offset: Tuple[float, ...]
    tag: str = ""

    def __post_init__(self):
        object.__setattr__(self, 'offset', _as_point(self.offset, "Anchor offset"))
        if self.tag is None:
            raise InvalidArgument("Anchor tag must not be None")


@dataclass(eq=False)
class ChunkTemplate:
    """Immutable, reusable chunk blueprint.

    Attributes:
        extent: (width, height) for 2D or (width, height, depth) for 3D templates
        contexts: Connection points chunks of this template can be aligned at
        weight: Relative weight; weight 2 is picked about twice as often as weight 1
        tag: Category used by restrictions and post-processing predicates
        allow_rotation: Whether the generator may rotate chunks by quarter turns
        anchors: Content placeholders copied onto every chunk
        name: Optional display name
        index: Catalog-wide index, assigned on registration
    """
    extent: Tuple[float, ...]
    contexts: Tuple[ContextDefinition, ...] = ()
    weight: float = 1
    tag: str = ""
    allow_rotation: bool = False
    anchors: Tuple[AnchorDefinition, ...] = ()
    name: Optional[str] = None
    index: int = field(default=-1, compare=False)

    def __post_init__(self):
        self.extent = _as_point(self.extent, "Template extent")
        if any(e <= 0 for e in self.extent):
            raise InvalidArgument(f"Template extent must be positive, got {self.extent}")
        if self.weight is None or self.weight <= 0:
            raise InvalidArgument(f"Template weight must be greater than zero, got {self.weight}")
        if self.tag is None:
            raise InvalidArgument("Template tag must not be None")

        self.contexts = tuple(self.contexts or ())
        self.anchors = tuple(self.anchors or ())
        for definition in self.contexts:
            if not isinstance(definition, ContextDefinition):
                raise InvalidArgument(f"Expected ContextDefinition, got {type(definition).__name__}")
            self._check_offset(definition.offset, "Context")
            if self.dimensions == 2 and not definition.direction.is_planar:
                raise InvalidArgument(
                    f"2D template context cannot face {definition.direction.name}"
                )
        for definition in self.anchors:
            if not isinstance(definition, AnchorDefinition):
                raise InvalidArgument(f"Expected AnchorDefinition, got {type(definition).__name__}")
            self._check_offset(definition.offset, "Anchor")

    def _check_offset(self, offset: Tuple[float, ...], what: str) -> None:
        if len(offset) != self.dimensions:
            raise InvalidArgument(
                f"{what} offset {offset} does not match {self.dimensions}D template"
            )
        for value, limit in zip(offset, self.extent):
            if value < 0 or value > limit:
                raise InvalidArgument(
                    f"{what} offset {offset} lies outside template extent {self.extent}"
                )

    @property
    def dimensions(self) -> int:
        return len(self.extent)

    @property
    def size(self) -> float:
        """Area (2D) or volume (3D) of chunks built from this template."""
        return math.prod(self.extent)

    @property
    def orientations(self) -> Tuple[int, ...]:
        """Quarter-turn rotations the generator may try."""
        return (0, 1, 2, 3) if self.allow_rotation else (0,)

    @property
    def display_name(self) -> str:
        if self.name:
            return self.name
        return self.tag or f"template-{self.index}"

    def context_offset(self, index: int, rotation: int = 0) -> Tuple[float, ...]:
        """Offset of a context definition after rotating the template."""
        return rotate_offset(self.contexts[index].offset, self.extent, rotation)

    def context_direction(self, index: int, rotation: int = 0) -> Direction:
        """Facing of a context definition after rotating the template."""
        return rotate_direction(self.contexts[index].direction, rotation)


# =============================================================================
# PLACED ENTITIES
# =============================================================================

@dataclass(eq=False)
class Context:
    """Directed connection point on a placed chunk.

    A context is open while it has no target. Aligning two contexts closes both;
    the pair stays linked for traversal and inspection.
    """
    chunk: 'Chunk' = field(repr=False)
    index: int
    position: Tuple[float, ...]
    direction: Direction
    tag: str = ""
    target: Optional['Context'] = field(default=None, repr=False)
    blocked: bool = False  # Generator gave up on extending this context

    @property
    def is_open(self) -> bool:
        return self.target is None

    def is_adjacent_to(self, other: 'Context', offset: float) -> bool:
        """Check whether another context lies within the given distance."""
        if other is None:
            raise InvalidArgument("Context to compare against is required")
        if len(other.position) != len(self.position):
            raise InvalidArgument("Cannot compare 2D and 3D contexts")
        return math.dist(self.position, other.position) <= offset

    def _align_to(self, other: 'Context') -> None:
        if other is None:
            raise InvalidArgument("Context to align to is required")
        if other.chunk is self.chunk:
            raise InvalidOperation("Cannot align two contexts of the same chunk")
        if self.target is not None or other.target is not None:
            raise InvalidOperation(
                "Context is already aligned; clear its target before aligning it again"
            )
        self.target = other
        other.target = self

    def _clear_target(self) -> Optional['Context']:
        """Unlink this context and re-open its former partner."""
        partner = self.target
        if partner is None:
            return None
        partner.target = None
        partner.blocked = False
        self.target = None
        return partner

    def __str__(self) -> str:
        return f"{_format_point(self.position)} facing {self.direction.value}"


@dataclass(eq=False)
class Anchor:
    """Placeholder for a game element, filled after generation."""
    chunk: 'Chunk' = field(repr=False)
    index: int
    position: Tuple[float, ...]
    tag: str = ""


class Chunk:
    """A placed, possibly rotated instance of a chunk template.

    Args:
        template: Template this chunk is built from
        position: World position of the chunk's min corner
        rotation: Clockwise quarter turns applied to the template
    """

    def __init__(self, template: ChunkTemplate, position: Sequence[float], rotation: int = 0):
        if template is None:
            raise InvalidArgument("Chunk template is required")
        position = _as_point(position, "Chunk position")
        if len(position) != template.dimensions:
            raise InvalidArgument(
                f"{len(position)}D position given for {template.dimensions}D template"
            )
        if rotation % 4 != 0 and not template.allow_rotation:
            raise InvalidArgument(f"Template {template.display_name} does not allow rotation")

        self.id = str(uuid.uuid4())
        self.template = template
        self.rotation = rotation % 4
        self.position = position
        self.bounds: Shape = make_shape(position, rotate_extent(template.extent, self.rotation))

        self._contexts: List[Context] = []
        for i, definition in enumerate(template.contexts):
            self._contexts.append(Context(
                chunk=self,
                index=i,
                position=self._to_world(template.context_offset(i, self.rotation)),
                direction=template.context_direction(i, self.rotation),
                tag=definition.tag,
            ))

        self.anchors: Tuple[Anchor, ...] = tuple(
            Anchor(
                chunk=self,
                index=i,
                position=self._to_world(rotate_offset(definition.offset, template.extent, self.rotation)),
                tag=definition.tag,
            )
            for i, definition in enumerate(template.anchors)
        )

    def _to_world(self, offset: Sequence[float]) -> Tuple[float, ...]:
        return tuple(p + o for p, o in zip(self.position, offset))

    @property
    def dimensions(self) -> int:
        return self.template.dimensions

    @property
    def extent(self) -> Tuple[float, ...]:
        return self.bounds.extent

    @property
    def size(self) -> float:
        return self.bounds.size

    @property
    def tag(self) -> str:
        return self.template.tag

    @property
    def weight(self) -> float:
        return self.template.weight

    @property
    def contexts(self) -> Tuple[Context, ...]:
        return tuple(self._contexts)

    def open_contexts(self) -> Iterator[Context]:
        """Lazily yield this chunk's currently open contexts."""
        return (context for context in self._contexts if context.is_open)

    def has_open_contexts(self) -> bool:
        return any(context.is_open for context in self._contexts)

    def aligned_context_count(self) -> int:
        return sum(1 for context in self._contexts if not context.is_open)

    def get_context(self, index: int) -> Context:
        """Get the context created from the template context with the given index."""
        for context in self._contexts:
            if context.index == index:
                return context
        raise NotFoundError(f"Chunk {self} has no context with index {index}")

    def owns(self, context: Context) -> bool:
        return any(c is context for c in self._contexts)

    def _remove_context(self, context: Context) -> None:
        for i, candidate in enumerate(self._contexts):
            if candidate is context:
                del self._contexts[i]
                context._clear_target()
                return
        raise NotFoundError(f"Context {context} does not belong to chunk {self}")

    def __str__(self) -> str:
        return _format_point(self.position)

    def __repr__(self) -> str:
        return (
            f"Chunk({self.template.display_name!r}, position={_format_point(self.position)}, "
            f"rotation={self.rotation * 90})"
        )
