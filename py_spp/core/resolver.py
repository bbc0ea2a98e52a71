"""
Collapse and consistency resolution.

Turns a grown chunk whose faces are still in superposition into a fully
resolved chunk in two steps:

1. Every cell is collapsed independently, one option per face.
2. A neighbour repair pass makes adjacent cells agree on shared faces. An
   open resolution on one side is copied verbatim onto the opposite face of
   the neighbour. Two walls facing each other may differ.

The grown cells are never touched; resolution builds new cell objects.
"""

from typing import Iterable, List, Tuple

import structlog

from .alea_prng import AleaPRNG
from .particle import (
    HORIZONTAL_FACES,
    Face,
    ParticleCell,
    ParticleChunk,
    Position,
    collapse_cell,
    is_open_option,
    resolved_option,
)

logger = structlog.get_logger()


def collapse_chunk(cells: Iterable[ParticleCell], prng: AleaPRNG) -> ParticleChunk:
    """
    Collapse every cell, in iteration order, into a new chunk.

    Args:
        cells: Cells to collapse; order fixes the PRNG draw sequence
        prng: Random source owned by the caller

    Returns:
        ParticleChunk of resolved copies
    """
    resolved = ParticleChunk()
    for cell in cells:
        resolved.add(collapse_cell(cell, prng))
    return resolved


def repair_neighbors(chunk: ParticleChunk) -> int:
    """
    Force neighbours to mirror open resolutions on shared faces.

    Each shared face is settled once, from the cell with the smaller
    position. An open side overwrites a wall side; when both sides are open
    with different ids, the smaller position's id is kept. Every face
    belongs to exactly one shared face pair, so the result does not depend
    on the order cells were inserted.

    Returns:
        Number of faces that were overwritten
    """
    overwrites = 0
    for cell in chunk:
        for face in HORIZONTAL_FACES:
            neighbor = chunk.neighbor(cell, face)
            if neighbor is None or neighbor.position < cell.position:
                continue
            mine = resolved_option(cell, face)
            opposite = face.opposite
            theirs = resolved_option(neighbor, opposite)
            if mine == theirs:
                continue
            if is_open_option(mine):
                neighbor.face_options[opposite] = [mine]
                overwrites += 1
            elif is_open_option(theirs):
                cell.face_options[face] = [theirs]
                overwrites += 1
    return overwrites


def find_symmetry_violations(chunk: ParticleChunk) -> List[Tuple[Position, Face, Position]]:
    """List (position, face, neighbour position) triples whose open resolution is not mirrored."""
    violations = []
    for cell in chunk:
        for face in HORIZONTAL_FACES:
            neighbor = chunk.neighbor(cell, face)
            if neighbor is None:
                continue
            mine = resolved_option(cell, face)
            theirs = resolved_option(neighbor, face.opposite)
            if (is_open_option(mine) or is_open_option(theirs)) and mine != theirs:
                violations.append((cell.position, face, neighbor.position))
    return violations


def resolve(cells: Iterable[ParticleCell], prng: AleaPRNG) -> ParticleChunk:
    """Collapse then repair; the returned chunk satisfies the symmetry invariant."""
    resolved = collapse_chunk(cells, prng)
    overwrites = repair_neighbors(resolved)
    logger.debug("Neighbor repair pass", cells=len(resolved), overwrites=overwrites)
    return resolved
