"""
Topology analysis of resolved chunks.

The cascade branching policy is a tunable, not a contract, so these
measurements are how callers judge what a given setting produces: loop
count (cycle rank), dead ends and connectivity. Array export is provided
for consumers that prefer bulk NumPy data over cell objects.
"""

from dataclasses import dataclass
from typing import Dict, List, Sequence, Set, Tuple

import numpy as np

from .particle import FACE_COUNT, Face, ParticleChunk, Position, resolved_option
from .pathfinding import open_neighbors

UNRESOLVED = -1


@dataclass
class TopologyStats:
    """Summary of the open-edge graph of a chunk."""

    cells: int
    open_edges: int
    components: int
    cycle_rank: int
    dead_ends: int
    max_degree: int

    @property
    def dead_end_ratio(self) -> float:
        return self.dead_ends / self.cells if self.cells else 0.0

    @property
    def is_connected(self) -> bool:
        return self.components <= 1


def open_adjacency(chunk: ParticleChunk) -> Dict[Position, List[Position]]:
    """Open-edge adjacency list for every cell, in chunk order."""
    return {cell.position: open_neighbors(chunk, cell) for cell in chunk}


def connected_components(chunk: ParticleChunk) -> List[Set[Position]]:
    """Groups of cells mutually reachable through open faces."""
    adjacency = open_adjacency(chunk)
    seen: Set[Position] = set()
    components = []
    for position in adjacency:
        if position in seen:
            continue
        component = {position}
        stack = [position]
        while stack:
            current = stack.pop()
            for nxt in adjacency[current]:
                if nxt not in component:
                    component.add(nxt)
                    stack.append(nxt)
        seen |= component
        components.append(component)
    return components


def reachable_from(chunk: ParticleChunk, origin: Sequence[int]) -> Set[Position]:
    """Every position connected to ``origin`` by open faces (empty if absent)."""
    origin = tuple(origin)
    for component in connected_components(chunk):
        if origin in component:
            return component
    return set()


def analyze_topology(chunk: ParticleChunk) -> TopologyStats:
    """
    Measure the open-edge graph of a resolved chunk.

    Args:
        chunk: Resolved chunk

    Returns:
        TopologyStats for the chunk
    """
    adjacency = open_adjacency(chunk)
    degrees = np.fromiter((len(links) for links in adjacency.values()), dtype=np.int32, count=len(adjacency))
    cells = len(adjacency)
    edges = int(degrees.sum()) // 2
    components = len(connected_components(chunk))

    return TopologyStats(
        cells=cells,
        open_edges=edges,
        components=components,
        cycle_rank=edges - cells + components,
        dead_ends=int(np.count_nonzero(degrees == 1)),
        max_degree=int(degrees.max()) if cells else 0,
    )


def chunk_to_arrays(chunk: ParticleChunk) -> Tuple[np.ndarray, np.ndarray]:
    """
    Export a chunk as dense arrays.

    Returns:
        (positions, options): int32 array of shape (N, 3) and int16 array of
        shape (N, 6) holding the resolved option per face, UNRESOLVED where a
        face is empty or still in superposition
    """
    positions = np.zeros((len(chunk), 3), dtype=np.int32)
    options = np.full((len(chunk), FACE_COUNT), UNRESOLVED, dtype=np.int16)
    for i, cell in enumerate(chunk):
        positions[i] = cell.position
        for face in Face:
            option = resolved_option(cell, face)
            if option is not None:
                options[i, face] = option
    return positions, options
