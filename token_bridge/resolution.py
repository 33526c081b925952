"""Alias resolution over token reference graphs.

Variable-graph exports reference other variables by id; DTCG files
reference other tokens by dotted path. Both are walked the same way: an
explicit visited-set walk over a map of key -> node, bounded by a hop
limit. The result always carries the last value seen together with a
status, so callers can distinguish "resolved to X" from "gave up".
"""

from collections.abc import Callable, Collection, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

NodeT = TypeVar("NodeT")

DEFAULT_MAX_DEPTH = 10


class ResolutionStatus(Enum):
    """Outcome of following a value's alias chain."""

    LITERAL = "literal"  # Value was not an alias
    RESOLVED = "resolved"  # Alias chain ended in a literal value
    MISSING = "missing"  # Chain pointed at a key that doesn't exist
    CYCLE = "cycle"  # Chain revisited a node
    DEPTH_EXCEEDED = "depth_exceeded"  # Hop limit reached

    @property
    def is_resolved(self) -> bool:
        """True when the value is a usable literal."""
        return self in (ResolutionStatus.LITERAL, ResolutionStatus.RESOLVED)


@dataclass(frozen=True)
class Resolution:
    """A resolved (or partially resolved) value.

    Attributes:
        value: Last value seen; still an alias when resolution gave up.
        status: How the walk ended.
        hops: Number of alias hops followed.
        unresolved_ref: The reference that could not be followed, if any.
        trail: Keys followed, in order.
    """

    value: Any
    status: ResolutionStatus
    hops: int = 0
    unresolved_ref: str | None = None
    trail: tuple[str, ...] = ()

    @property
    def is_resolved(self) -> bool:
        return self.status.is_resolved


class AliasResolver(Generic[NodeT]):
    """Follows alias chains through an indexed node graph.

    Args:
        nodes: Mapping from reference key to node.
        reference_of: Returns the referenced key if a value is an alias,
            else None.
        value_of: Returns the value a node contributes for the walk
            (e.g. the value for a given mode).
        max_depth: Maximum number of alias hops.
    """

    def __init__(
        self,
        nodes: Mapping[str, NodeT],
        reference_of: Callable[[Any], str | None],
        value_of: Callable[[NodeT], Any],
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> None:
        self._nodes = nodes
        self._reference_of = reference_of
        self._value_of = value_of
        self._max_depth = max_depth

    def resolve(
        self,
        value: Any,
        origin: str | None = None,
        exclude: Collection[str] = (),
    ) -> Resolution:
        """Follow value's alias chain until a literal or a dead end.

        Args:
            value: Starting value, possibly an alias.
            origin: Key of the node the value belongs to, so a
                self-reference is reported as a cycle.
            exclude: Keys already on an enclosing walk. Reaching one is
                a cycle; used when composite values nest aliases.
        """
        visited: set[str] = set(exclude)
        if origin is not None:
            visited.add(origin)
        trail: list[str] = []
        current = value

        while True:
            hops = len(trail)
            ref = self._reference_of(current)
            if ref is None:
                status = ResolutionStatus.RESOLVED if hops else ResolutionStatus.LITERAL
                return Resolution(current, status, hops, trail=tuple(trail))
            if hops >= self._max_depth:
                return Resolution(
                    current, ResolutionStatus.DEPTH_EXCEEDED, hops, ref, tuple(trail)
                )
            if ref in visited:
                return Resolution(current, ResolutionStatus.CYCLE, hops, ref, tuple(trail))
            target = self._nodes.get(ref)
            if target is None:
                return Resolution(current, ResolutionStatus.MISSING, hops, ref, tuple(trail))

            visited.add(ref)
            trail.append(ref)
            current = self._value_of(target)
