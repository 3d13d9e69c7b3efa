"""Symmetry-class view of a reachability table.

The lock looks the same after a quarter turn of the whole assembly, so a
state and its rotations are reached by rotated copies of the same sequences
and share count and minimal length. A symmetry class is the orbit of a state
under rotation; classes are found as connected components of a graph that
links every state to its quarter-turn image.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

import networkx as nx

from speed_dial.config.constants import QUARTER_TURNS
from speed_dial.domain.mechanism import LockState, rotate
from speed_dial.search.aggregator import ReachabilityRecord


@dataclass(frozen=True)
class SymmetryClass:
    """States equivalent under quarter-turn rotation, with aggregate counts."""

    representative: LockState
    members: tuple[LockState, ...]
    total_count: int
    min_length: int
    min_collisions: int
    max_collisions: int

    @property
    def size(self) -> int:
        return len(self.members)


def symmetry_orbit(state: LockState) -> frozenset[LockState]:
    """Every rotation of ``state`` (1, 2 or 4 distinct states)."""
    return frozenset(rotate(state, k) for k in range(QUARTER_TURNS))


def canonical_representative(state: LockState) -> LockState:
    """Smallest member of the orbit; identical for every member."""
    return min(symmetry_orbit(state))


def class_statistics(
    table: Mapping[LockState, ReachabilityRecord],
    representative: LockState,
) -> SymmetryClass:
    """Aggregate the orbit of ``representative`` over the states in ``table``.

    The result does not depend on which member is passed in.
    """
    members = tuple(sorted(s for s in symmetry_orbit(representative) if s in table))
    if not members:
        raise KeyError(f"no member of the orbit of {representative} is in the table")
    records = [table[s] for s in members]
    return SymmetryClass(
        representative=members[0],
        members=members,
        total_count=sum(r.count for r in records),
        min_length=min(r.min_length for r in records),
        min_collisions=min(r.collisions for r in records),
        max_collisions=max(r.collisions for r in records),
    )


def build_symmetry_graph(table: Mapping[LockState, ReachabilityRecord]) -> nx.Graph:
    """Graph with a node per state and an edge to each rotation present in the table."""
    graph = nx.Graph()
    graph.add_nodes_from(table)
    for state in table:
        for image in symmetry_orbit(state):
            if image != state and image in table:
                graph.add_edge(state, image)
    return graph


def build_symmetry_classes(
    table: Mapping[LockState, ReachabilityRecord],
) -> list[SymmetryClass]:
    """Partition the table into symmetry classes, ordered by representative."""
    graph = build_symmetry_graph(table)
    classes = [
        class_statistics(table, min(component)) for component in nx.connected_components(graph)
    ]
    classes.sort(key=lambda c: c.representative)
    return classes


def rank_classes(classes: list[SymmetryClass]) -> list[SymmetryClass]:
    """Order classes as an informed guesser would try them: fewest collisions first."""
    return sorted(classes, key=lambda c: (c.min_collisions, -c.min_length, c.representative))
