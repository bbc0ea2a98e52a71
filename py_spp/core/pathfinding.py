"""Breadth-first path search over the open faces of a resolved chunk."""

from collections import deque
from typing import Dict, List, Optional, Sequence

from .particle import (
    HORIZONTAL_FACES,
    ParticleCell,
    ParticleChunk,
    Position,
    is_open_option,
    neighbor_position,
    resolved_option,
)


def open_neighbors(chunk: ParticleChunk, cell: ParticleCell) -> List[Position]:
    """
    Positions reachable in one step from ``cell``.

    An edge exists when the shared face resolves to an open option on either
    side. Neighbours are listed in fixed face order.
    """
    reachable = []
    for face in HORIZONTAL_FACES:
        nxt = neighbor_position(cell.position, face)
        neighbor = chunk.get(nxt)
        if neighbor is None:
            continue
        if is_open_option(resolved_option(cell, face)) or is_open_option(
            resolved_option(neighbor, face.opposite)
        ):
            reachable.append(nxt)
    return reachable


def find_path(chunk: ParticleChunk, start: Sequence[int], goal: Sequence[int]) -> Optional[List[Position]]:
    """
    Shortest open path between two cells, by edge count.

    Args:
        chunk: Fully resolved chunk
        start: Start position key
        goal: Goal position key

    Returns:
        Ordered positions from start to goal inclusive, or None when either
        key is missing or the goal cannot be reached
    """
    start, goal = tuple(start), tuple(goal)
    if start not in chunk or goal not in chunk:
        return None
    if start == goal:
        return [start]

    parents: Dict[Position, Optional[Position]] = {start: None}
    queue = deque([start])
    while queue:
        current = queue.popleft()
        for nxt in open_neighbors(chunk, chunk[current]):
            if nxt in parents:
                continue
            parents[nxt] = current
            if nxt == goal:
                return _walk_back(parents, goal)
            queue.append(nxt)
    return None


def path_steps(path: Optional[List[Position]]) -> Optional[int]:
    """Number of moves along a path, or None when there is no path."""
    if path is None:
        return None
    return len(path) - 1


def _walk_back(parents: Dict[Position, Optional[Position]], goal: Position) -> List[Position]:
    path = [goal]
    while parents[path[-1]] is not None:
        path.append(parents[path[-1]])
    path.reverse()
    return path
