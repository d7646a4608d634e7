"""
Chunk catalog: read-only registry of the templates a generator may place.

The generator only enumerates templates and samples them by weight; a catalog is
passed to each generator explicitly rather than kept as a module-level singleton.
"""

from __future__ import annotations

import logging
from typing import Iterable, Iterator, List, Optional

from ..errors import InvalidArgument
from .data_model import ChunkTemplate

logger = logging.getLogger(__name__)


class ChunkCatalog:
    """Ordered registry of chunk templates.

    Templates receive their catalog index on registration. All templates in one
    catalog must share the same dimensionality.
    """

    def __init__(self, templates: Optional[Iterable[ChunkTemplate]] = None):
        self._templates: List[ChunkTemplate] = []
        if templates is not None:
            self.extend(templates)

    def register(self, template: ChunkTemplate) -> ChunkTemplate:
        """Register a template and assign its catalog index.

        Args:
            template: Template to add

        Returns:
            The registered template

        Raises:
            InvalidArgument: If the template is missing, already registered, or its
                dimensionality differs from the templates already in the catalog
        """
        if template is None:
            raise InvalidArgument("Template is required")
        if not isinstance(template, ChunkTemplate):
            raise InvalidArgument(f"Expected ChunkTemplate, got {type(template).__name__}")
        if any(t is template for t in self._templates):
            raise InvalidArgument(f"Template {template.display_name} is already registered")
        if self._templates and template.dimensions != self.dimensions:
            raise InvalidArgument(
                f"Cannot mix {template.dimensions}D template {template.display_name} "
                f"into a {self.dimensions}D catalog"
            )

        template.index = len(self._templates)
        self._templates.append(template)
        if not template.contexts:
            logger.warning(f"Template {template.display_name} has no contexts and can only be a root")
        return template

    def extend(self, templates: Iterable[ChunkTemplate]) -> None:
        for template in templates:
            self.register(template)

    @property
    def dimensions(self) -> Optional[int]:
        """Dimensionality shared by all templates, None while empty."""
        if not self._templates:
            return None
        return self._templates[0].dimensions

    @property
    def templates(self) -> tuple:
        return tuple(self._templates)

    def weights(self) -> List[float]:
        return [t.weight for t in self._templates]

    def weighted_choice(self, random) -> ChunkTemplate:
        """Pick one template according to its weight.

        Args:
            random: RandomSource to draw from
        """
        if not self._templates:
            raise InvalidArgument("Cannot pick a template from an empty catalog")
        return random.weighted_choice(self._templates, self.weights())

    def find_by_tag(self, tag: str) -> List[ChunkTemplate]:
        return [t for t in self._templates if t.tag == tag]

    def __len__(self) -> int:
        return len(self._templates)

    def __iter__(self) -> Iterator[ChunkTemplate]:
        return iter(self._templates)

    def __getitem__(self, index: int) -> ChunkTemplate:
        return self._templates[index]

    def __bool__(self) -> bool:
        return bool(self._templates)
