"""
Level generator: stitches chunk templates together at open contexts.

Each iteration runs three stations:
1. SELECT   - pick a processible (open, not blocked) context
2. PROPOSE  - enumerate template / rotation / context candidates whose context faces
              the exact opposite way, translated so both context positions coincide
3. VALIDATE - reject candidates outside the level bounds, overlapping any placed chunk,
              or (optionally) facing into occupied space

The first valid candidate is committed: the chunk is added and the two contexts are
aligned. A context without any valid candidate is a dead end, which is either blocked
(left open for post-processing) or backtracked (its leaf chunk removed and the parent
context retried with a different candidate).

Generation stops when a termination condition is met, when no processible context
remains, or when the iteration budget is spent. Budget exhaustion is reported on the
result, not raised.
"""

from __future__ import annotations

import logging
import math
import time
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Iterator, List, Optional, Sequence, Set, Tuple

from ..errors import GenerationExhausted, InvalidArgument
from ..geometry import EPSILON, Direction, Shape, inset, make_shape, point_shape, rotate_extent
from ..layout import Chunk, ChunkCatalog, ChunkTemplate, Context, Level
from ..validation import ValidationResult, validate_level
from .parameters import (
    BlockedContextPolicy,
    ChunkDistribution,
    ContextAlignmentRestriction,
    DeadEndPolicy,
    MaximumChunkCount,
    MaximumLevelSize,
    TerminationCondition,
    select_context,
)
from .random_source import RandomSource
from .settings import GeneratorSettings

# Distance a probe point is pushed past a context to test what lies behind it
PROBE_DISTANCE = 1e-6


# =============================================================================
# RESULT TYPES
# =============================================================================

class TerminationReason(Enum):
    TARGET_REACHED = "target_reached"
    NO_OPEN_CONTEXTS = "no_open_contexts"
    BUDGET_EXHAUSTED = "budget_exhausted"


@dataclass(frozen=True)
class Placement:
    """A candidate: template, rotation and which of its contexts meets the target."""
    template: ChunkTemplate
    rotation: int
    context_index: int
    position: Tuple[float, ...]

    @property
    def key(self) -> Tuple[int, int, int]:
        return (self.template.index, self.rotation, self.context_index)

    @property
    def bounds(self) -> Shape:
        return make_shape(self.position, rotate_extent(self.template.extent, self.rotation))

    def context_layout(self) -> List[Tuple[int, Tuple[float, ...], Direction]]:
        """World position and facing of every template context after placement."""
        layout = []
        for i in range(len(self.template.contexts)):
            offset = self.template.context_offset(i, self.rotation)
            position = tuple(p + o for p, o in zip(self.position, offset))
            layout.append((i, position, self.template.context_direction(i, self.rotation)))
        return layout


@dataclass
class GenerationStats:
    iterations: int = 0
    candidates_tested: int = 0
    candidates_rejected: int = 0
    blocked_contexts: int = 0
    backtracks: int = 0
    backtrack_budget_spent: bool = False  # dead end blocked with no backtracks left
    chunks_placed: int = 0
    template_counts: Dict[int, int] = field(default_factory=dict)
    elapsed: float = 0.0

    def template_shares(self) -> Dict[int, float]:
        """Percentage of the level's chunks built from each template index."""
        total = sum(self.template_counts.values())
        if not total:
            return {index: 0.0 for index in self.template_counts}
        return {index: 100.0 * count / total for index, count in self.template_counts.items()}


@dataclass
class GenerationProgress:
    chunk_count: int
    iteration: int
    progress: float  # 0..1 towards the closest termination condition
    message: str

    @property
    def percentage(self) -> int:
        return int(self.progress * 100)


@dataclass
class GenerationResult:
    level: Level
    seed: int
    termination: TerminationReason
    stats: GenerationStats
    warnings: List[str] = field(default_factory=list)
    policy_results: list = field(default_factory=list)
    validation: Optional[ValidationResult] = None

    @property
    def exhausted(self) -> bool:
        """True when the iteration or the backtrack budget ran out."""
        return (self.termination == TerminationReason.BUDGET_EXHAUSTED
                or self.stats.backtrack_budget_spent)

    def raise_if_exhausted(self) -> 'GenerationResult':
        """Raise GenerationExhausted when the iteration or backtrack budget ran out."""
        if self.termination == TerminationReason.BUDGET_EXHAUSTED:
            raise GenerationExhausted(
                self,
                f"Iteration budget of {self.stats.iterations} exhausted with "
                f"{len(self.level)} chunks placed",
            )
        if self.stats.backtrack_budget_spent:
            raise GenerationExhausted(
                self,
                f"Backtrack budget of {self.stats.backtracks} exhausted with "
                f"{len(self.level.find_open_contexts())} open contexts left",
            )
        return self


# =============================================================================
# GENERATOR
# =============================================================================

class LevelGenerator:
    """Generates levels from a chunk catalog.

    Args:
        catalog: Templates to place; must be non-empty
        settings: GeneratorSettings, defaults when omitted
        random_source: Injected RandomSource; built from settings.seed when omitted
        logger: Logging sink for progress and removal notices
        distribution: ChunkDistribution giving effective template weights
        alignment: ContextAlignmentRestriction deciding which contexts may meet
        termination_conditions: Conditions stopping generation; built from
            settings.max_chunks / settings.max_level_size when omitted
        selection: SelectionMode or callable(contexts, random) -> Context
        post_processing: PostProcessingPolicy instances run in order after generation
        progress_callback: Called with a GenerationProgress after each placed chunk
    """

    def __init__(
        self,
        catalog: ChunkCatalog,
        settings: Optional[GeneratorSettings] = None,
        random_source: Optional[RandomSource] = None,
        logger: Optional[logging.Logger] = None,
        distribution: Optional[ChunkDistribution] = None,
        alignment: Optional[ContextAlignmentRestriction] = None,
        termination_conditions: Optional[Sequence[TerminationCondition]] = None,
        selection=None,
        post_processing: Optional[Sequence] = None,
        progress_callback: Optional[Callable[[GenerationProgress], None]] = None,
    ):
        if catalog is None:
            raise InvalidArgument("Chunk catalog is required")
        if len(catalog) == 0:
            raise InvalidArgument("Chunk catalog is empty")
        self.catalog = catalog
        self.settings = settings or GeneratorSettings(dimensions=catalog.dimensions)
        self.settings.validate()
        if catalog.dimensions != self.settings.dimensions:
            raise InvalidArgument(
                f"{catalog.dimensions}D catalog cannot build a {self.settings.dimensions}D level"
            )

        self.random = random_source or RandomSource(self.settings.seed)
        self.logger = logger or logging.getLogger(__name__)
        self.distribution = distribution or ChunkDistribution()
        self.alignment = alignment or ContextAlignmentRestriction()
        if termination_conditions is None:
            termination_conditions = []
            if self.settings.max_chunks is not None:
                termination_conditions.append(MaximumChunkCount(self.settings.max_chunks))
            if self.settings.max_level_size is not None:
                termination_conditions.append(MaximumLevelSize(self.settings.max_level_size))
        self.termination_conditions: List[TerminationCondition] = list(termination_conditions)
        self.selection = selection if selection is not None else self.settings.selection
        self.post_processing = list(post_processing or [])
        self.progress_callback = progress_callback

        # Failed (template index, rotation, context index) choices per parent context
        self._tabu: Dict[Context, Set[Tuple[int, int, int]]] = {}

    # -- helpers --

    def set_progress_callback(self, callback: Callable[[GenerationProgress], None]):
        self.progress_callback = callback

    def _termination_met(self, level: Level) -> bool:
        return any(condition.is_met(level) for condition in self.termination_conditions)

    def _progress(self, level: Level) -> float:
        if not self.termination_conditions:
            return 0.0
        return max(condition.progress(level) for condition in self.termination_conditions)

    def _report_progress(self, level: Level, stats: GenerationStats, message: str):
        if self.progress_callback:
            self.progress_callback(GenerationProgress(
                chunk_count=len(level),
                iteration=stats.iterations,
                progress=self._progress(level),
                message=message,
            ))

    # =========================================================================
    # Public API
    # =========================================================================

    def generate(self, level: Optional[Level] = None) -> GenerationResult:
        """Run the placement loop, then post-processing and validation.

        Args:
            level: Level to extend in place; a new one is created when omitted.
                An empty level is seeded with a starting chunk.

        Returns:
            GenerationResult describing the run
        """
        start_time = time.time()
        if level is None:
            level = Level(self.settings.dimensions, self.settings.level_bounds)
        elif level.dimensions != self.settings.dimensions:
            raise InvalidArgument(
                f"Cannot extend a {level.dimensions}D level with a {self.settings.dimensions}D catalog"
            )

        stats = GenerationStats()
        self._tabu = {}
        self.logger.info(
            f"Generating level from {len(self.catalog)} templates "
            f"(seed={self.random.seed}, starting chunks={len(level)})"
        )

        if len(level) == 0:
            root = self.place_starting_chunk(level)
            stats.chunks_placed += 1
            self._report_progress(level, stats, f"Placed starting chunk at {root}")

        while True:
            if self._termination_met(level):
                termination = TerminationReason.TARGET_REACHED
                break
            contexts = level.find_processible_contexts()
            if not contexts:
                termination = TerminationReason.NO_OPEN_CONTEXTS
                break
            if stats.iterations >= self.settings.max_iterations:
                termination = TerminationReason.BUDGET_EXHAUSTED
                self.logger.warning(
                    f"Iteration budget exhausted after {stats.iterations} iterations "
                    f"({len(contexts)} contexts left unprocessed)"
                )
                break

            stats.iterations += 1
            target = select_context(self.selection, contexts, self.random)
            self.logger.debug(f"Expanding level at {target} ({len(contexts)} processible contexts)")

            chunk = self._extend(level, target, stats)
            if chunk is None:
                self._handle_dead_end(level, target, stats)
            else:
                self._report_progress(level, stats, f"Placed {chunk.template.display_name} at {chunk}")

        counts = Counter(chunk.template.index for chunk in level)
        stats.template_counts = {t.index: counts.get(t.index, 0) for t in self.catalog}

        result = GenerationResult(
            level=level,
            seed=self.random.seed,
            termination=termination,
            stats=stats,
        )
        if len(level) == 0:
            result.warnings.append("Generated level is empty")
        elif len(level) == 1:
            result.warnings.append("Generated level is trivial: only the starting chunk remains")
        if stats.backtrack_budget_spent:
            result.warnings.append(
                f"Backtrack budget of {self.settings.max_backtracks} spent; "
                f"later dead ends were blocked"
            )
        for warning in result.warnings:
            self.logger.warning(warning)

        self._log_summary(result)

        for policy in self.post_processing:
            result.policy_results.append(policy.process(self, level))

        if self.settings.validate_result:
            result.validation = validate_level(level)
            result.validation.log(self.logger)

        stats.elapsed = time.time() - start_time
        self.logger.info(
            f"Generation finished: {termination.value}, {len(level)} chunks, "
            f"{len(level.find_open_contexts())} open contexts, {stats.elapsed:.3f}s"
        )
        return result

    def place_starting_chunk(self, level: Level, template: Optional[ChunkTemplate] = None,
                             position: Optional[Sequence[float]] = None,
                             rotation: Optional[int] = None) -> Chunk:
        """Place the first chunk of a level.

        Without an explicit position the chunk goes to settings.start_position, or to
        the origin for unbounded levels, or to a random position inside the bounds.
        Without an explicit rotation one of the template's orientations is drawn.
        """
        if level is None:
            raise InvalidArgument("Level is required")
        if template is None:
            template = self.catalog.weighted_choice(self.random)
        if rotation is None:
            rotation = self.random.choice(template.orientations)
        if position is None:
            position = self.settings.start_position
        if position is None:
            extent = rotate_extent(template.extent, rotation)
            if level.bounds is None:
                position = (0.0,) * level.dimensions
            else:
                if any(e > b for e, b in zip(extent, level.bounds.extent)):
                    raise InvalidArgument(
                        f"Template {template.display_name} does not fit into the level bounds"
                    )
                position = tuple(
                    self.random.uniform(0.0, b - e) for e, b in zip(extent, level.bounds.extent)
                )

        chunk = Chunk(template, position, rotation)
        if not self._within_bounds(level, chunk.bounds):
            raise InvalidArgument(f"Starting chunk at {chunk} lies outside the level bounds")
        if self._overlaps_level(level, chunk.bounds):
            raise InvalidArgument(f"Starting chunk at {chunk} overlaps an existing chunk")
        level.add_chunk(chunk)
        self.logger.info(f"Placed starting chunk {template.display_name} at {chunk}")
        return chunk

    def propose(self, level: Level, target: Context) -> Iterator[Placement]:
        """Yield candidate placements for a target context in seeded order.

        Templates come in weighted-random order without replacement; each template's
        rotation and context pairs are shuffled. Only contexts facing the exact
        opposite of the target, and accepted by the alignment restriction, are yielded.
        """
        if level is None or target is None:
            raise InvalidArgument("Level and target context are required")

        occurrences = Counter(chunk.template.index for chunk in level)
        templates = list(self.catalog)
        weights = [
            max(0.0, self.distribution.effective_weight(target, t, occurrences[t.index]))
            for t in templates
        ]
        tabu = self._tabu.get(target, set())
        wanted = target.direction.opposite()

        for template in self.random.weighted_order(templates, weights):
            options = [
                (rotation, index)
                for rotation in template.orientations
                for index in range(len(template.contexts))
            ]
            self.random.shuffle(options)
            for rotation, index in options:
                if (template.index, rotation, index) in tabu:
                    continue
                if template.context_direction(index, rotation) != wanted:
                    continue
                if not self.alignment.can_be_aligned(target, template.contexts[index]):
                    continue
                offset = template.context_offset(index, rotation)
                position = tuple(t - o for t, o in zip(target.position, offset))
                yield Placement(template, rotation, index, position)

    def validate_placement(self, level: Level, placement: Placement,
                           target: Optional[Context] = None) -> bool:
        """Check a candidate against the level without modifying it.

        Args:
            level: Level the candidate would be added to
            placement: Candidate from propose()
            target: When given, the candidate's context must face it and lie on it

        Returns:
            True if the candidate may be committed
        """
        if target is not None and not self._meets(placement, target):
            return False
        bounds = placement.bounds
        if not self._within_bounds(level, bounds):
            return False
        if self._overlaps_level(level, bounds):
            return False

        policy = self.settings.blocked_context_policy
        if policy == BlockedContextPolicy.IGNORE:
            return True
        others = [
            (position, direction)
            for index, position, direction in placement.context_layout()
            if index != placement.context_index
        ]
        if not others:
            return True
        blocked = [self._faces_occupied_space(level, p, d) for p, d in others]
        if policy == BlockedContextPolicy.REJECT_IF_ALL_BLOCKED:
            return not all(blocked)
        return not any(blocked)

    # =========================================================================
    # Internals
    # =========================================================================

    # Fit tests run on the candidate inset by EPSILON, so a chunk whose position came
    # out of float arithmetic may touch its neighbour or the bounds a few ulps too far.

    @staticmethod
    def _within_bounds(level: Level, bounds: Shape) -> bool:
        return level.bounds is None or level.bounds.contains(inset(bounds))

    @staticmethod
    def _overlaps_level(level: Level, bounds: Shape) -> bool:
        shrunk = inset(bounds)
        return any(chunk.bounds.intersects(shrunk) for chunk in level.chunks)

    @staticmethod
    def _meets(placement: Placement, target: Context) -> bool:
        _, position, direction = placement.context_layout()[placement.context_index]
        return (direction == target.direction.opposite()
                and math.dist(position, target.position) <= EPSILON)

    def _faces_occupied_space(self, level: Level, position: Tuple[float, ...],
                              direction: Direction) -> bool:
        step = direction.vector(level.dimensions)
        probe = point_shape([p + s * PROBE_DISTANCE for p, s in zip(position, step)])
        if level.bounds is not None and not level.bounds.contains(probe):
            return True
        return any(chunk.bounds.contains(probe) for chunk in level.chunks)

    def _extend(self, level: Level, target: Context, stats: GenerationStats) -> Optional[Chunk]:
        rejected = 0
        for placement in self.propose(level, target):
            stats.candidates_tested += 1
            if self.validate_placement(level, placement, target):
                if rejected:
                    self.logger.debug(f"Rejected {rejected} candidates before a fit at {target}")
                return self._commit(level, placement, target, stats)
            rejected += 1
            stats.candidates_rejected += 1
        self.logger.debug(f"No candidate fits at {target} ({rejected} rejected)")
        return None

    def _commit(self, level: Level, placement: Placement, target: Context,
                stats: GenerationStats) -> Chunk:
        chunk = Chunk(placement.template, placement.position, placement.rotation)
        level.add_chunk(chunk)
        context = chunk.get_context(placement.context_index)
        # Rounding in position + offset must not move the aligned pair apart
        context.position = target.position
        level.align(target, context)
        stats.chunks_placed += 1
        self.logger.info(
            f"Placed {placement.template.display_name} at {chunk} "
            f"(rotation {placement.rotation * 90}) on context {target}"
        )
        return chunk

    def _handle_dead_end(self, level: Level, target: Context, stats: GenerationStats):
        owner = target.chunk
        backtracking = self.settings.dead_end_policy == DeadEndPolicy.BACKTRACK
        if backtracking and stats.backtracks >= self.settings.max_backtracks:
            if not stats.backtrack_budget_spent:
                self.logger.warning(
                    f"Backtrack budget of {self.settings.max_backtracks} spent; "
                    f"blocking dead ends from {target} on"
                )
            stats.backtrack_budget_spent = True
        elif (backtracking
                and owner is not level.root
                and owner.aligned_context_count() == 1):
            attached = next(c for c in owner.contexts if c.target is not None)
            parent_context = attached.target
            failed = (owner.template.index, owner.rotation, attached.index)

            for context in owner.contexts:
                self._tabu.pop(context, None)
            level.remove_chunk(owner)
            self._tabu.setdefault(parent_context, set()).add(failed)
            stats.backtracks += 1
            self.logger.info(
                f"Backtracked: removed {owner.template.display_name} at {owner}, "
                f"retrying context {parent_context}"
            )
            return

        level.block_context(target)
        stats.blocked_contexts += 1
        self.logger.info(f"Blocked context at {target}: no candidate fits")

    def _log_summary(self, result: GenerationResult):
        stats = result.stats
        self.logger.info(
            f"Placed {stats.chunks_placed} chunks in {stats.iterations} iterations "
            f"({stats.candidates_tested} candidates tested, {stats.candidates_rejected} rejected, "
            f"{stats.blocked_contexts} contexts blocked, {stats.backtracks} backtracks)"
        )
        for index, share in stats.template_shares().items():
            self.logger.info(
                f"  {self.catalog[index].display_name}: "
                f"{stats.template_counts[index]} chunks ({share:.1f}%)"
            )
