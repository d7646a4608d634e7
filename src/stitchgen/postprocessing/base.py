"""
Base classes for post-processing policies.

A policy is a cleanup unit that runs over a finished level. Policies run in
sequence after generation halts, each until it reaches its own fixpoint: a full
scan that changes nothing.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List

from ..errors import InvalidArgument


@dataclass
class PolicyResult:
    """
    Result of running a post-processing policy.

    Attributes:
        policy: Name of the policy
        passes: Number of full scans, including the final scan that changed nothing
        removed: Chunks or contexts removed
        aligned: Context pairs aligned
        messages: One notice per removal or alignment
    """
    policy: str
    passes: int = 0
    removed: int = 0
    aligned: int = 0
    messages: List[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.removed or self.aligned)


class PostProcessingPolicy(ABC):
    """
    Base class for post-processing policies.

    Subclasses implement execute(); callers use process(), which checks its
    arguments first. The generator is passed for its logger.
    """

    @property
    def name(self) -> str:
        return type(self).__name__

    @abstractmethod
    def execute(self, generator, level) -> PolicyResult:
        """Run the policy on a level that is known to be valid."""
        pass

    def process(self, generator, level) -> PolicyResult:
        """
        Run this policy to its fixpoint.

        Raises:
            InvalidArgument: If the generator or the level is missing
        """
        if generator is None:
            raise InvalidArgument(f"{self.name} requires a generator")
        if level is None:
            raise InvalidArgument(f"{self.name} requires a level")

        result = self.execute(generator, level)
        generator.logger.info(
            f"{self.name}: {result.removed} removed, {result.aligned} aligned "
            f"in {result.passes} pass(es)"
        )
        return result

    def _notice(self, generator, result: PolicyResult, message: str) -> None:
        result.messages.append(message)
        generator.logger.info(message)

    def __repr__(self) -> str:
        return f"{self.name}()"
