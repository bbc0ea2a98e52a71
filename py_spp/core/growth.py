"""
Growth engine: builds a connected set of particle cells around the origin.

Two modes are provided:

1. Backtracking maze growth over an unbounded plane. A depth-first walk
   carves a spanning tree until the target cell count is reached.
2. Bounded cascade growth over a centered gridX x gridZ domain. A
   breadth-first frontier spreads from the origin and each newly connected
   cell pushes up to ``max_extra_branches`` extra edges, which produces a
   bushy branching layout instead of a single serpentine corridor. A fill
   pass tops the chunk up when random branching leaves the target unmet.

Every carved edge narrows exactly two faces (one on each side) to the open
option subset. All other horizontal faces keep the wall-only default.
"""

from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Dict, List, Optional, Set, Tuple

import structlog

from .alea_prng import AleaPRNG
from .particle import (
    HORIZONTAL_FACES,
    OPEN_IDS,
    Face,
    ParticleCell,
    ParticleChunk,
    Position,
    create_wall_default_cell,
    neighbor_position,
)

logger = structlog.get_logger()

ORIGIN: Position = (0, 0, 0)
DEFAULT_MAX_EXTRA_BRANCHES = 2


@dataclass(frozen=True)
class CollapseStep:
    """A cell joining the connected set, and the face it was entered through."""

    position: Position
    from_face: Optional[Face] = None


@dataclass
class GrowthResult:
    """Output of either growth mode, prior to collapse."""

    mode: str
    chunk: ParticleChunk
    domain: ParticleChunk
    adjacency: Dict[Position, List[Position]]
    collapse_order: List[CollapseStep]
    requested_cells: int
    target_cells: int
    bounds: Optional[Tuple[int, int]] = None  # (half_x, half_z) for bounded domains
    fill_carves: int = field(default=0)

    @property
    def achieved_cells(self) -> int:
        return len(self.chunk)

    @property
    def under_target(self) -> bool:
        return self.achieved_cells < self.target_cells

    def order_keys(self) -> List[Position]:
        return [step.position for step in self.collapse_order]


def carve(
    source: ParticleCell,
    face: Face,
    target: ParticleCell,
    adjacency: Dict[Position, List[Position]],
) -> None:
    """
    Open the face shared by two adjacent cells on both sides.

    Args:
        source: Cell carving outward
        face: Face of ``source`` that touches ``target``
        target: Cell on the other side of ``face``
        adjacency: Adjacency record, updated in both directions
    """
    if neighbor_position(source.position, face) != target.position:
        raise ValueError(
            f"cells {source.position} and {target.position} do not share face {face.name}"
        )
    source.face_options[face] = list(OPEN_IDS)
    target.face_options[face.opposite] = list(OPEN_IDS)

    for a, b in ((source.position, target.position), (target.position, source.position)):
        links = adjacency.setdefault(a, [])
        if b not in links:
            links.append(b)


def grow_backtracking_maze(
    target_cells: int,
    prng: AleaPRNG,
    origin: Position = ORIGIN,
) -> GrowthResult:
    """
    Grow a tree-shaped maze by randomized depth-first carving.

    Args:
        target_cells: Number of cells to create (upper bound)
        prng: Random source owned by the caller
        origin: Position of the seed cell

    Returns:
        GrowthResult whose chunk holds every created cell
    """
    if target_cells < 1:
        raise ValueError(f"target_cells must be at least 1, got {target_cells}")

    logger.info("Starting backtracking growth", target=target_cells)

    chunk = ParticleChunk()
    adjacency: Dict[Position, List[Position]] = {}
    origin_cell = chunk.add(create_wall_default_cell(origin))
    adjacency[origin_cell.position] = []
    collapse_order = [CollapseStep(origin_cell.position)]

    stack = [origin_cell]
    backtracks = 0

    while stack and len(chunk) < target_cells:
        current = stack[-1]
        unvisited = [
            face
            for face in prng.shuffled(HORIZONTAL_FACES)
            if neighbor_position(current.position, face) not in chunk
        ]
        if not unvisited:
            stack.pop()
            backtracks += 1
            continue

        face = unvisited[0]
        neighbor = chunk.add(create_wall_default_cell(neighbor_position(current.position, face)))
        carve(current, face, neighbor, adjacency)
        collapse_order.append(CollapseStep(neighbor.position, face.opposite))
        stack.append(neighbor)

    result = GrowthResult(
        mode="backtrack",
        chunk=chunk,
        domain=chunk,
        adjacency=adjacency,
        collapse_order=collapse_order,
        requested_cells=target_cells,
        target_cells=target_cells,
    )
    logger.debug("Backtracking growth counters", backtracks=backtracks)
    _log_outcome(result)
    return result


def grid_half_extents(grid_x: int, grid_z: int) -> Tuple[int, int]:
    """Half extents of a centered domain. Extents must be odd and positive."""
    for name, value in (("grid_x", grid_x), ("grid_z", grid_z)):
        if value < 1 or value % 2 == 0:
            raise ValueError(f"{name} must be a positive odd number, got {value}")
    return grid_x // 2, grid_z // 2


def build_domain(grid_x: int, grid_z: int) -> ParticleChunk:
    """Pre-create every cell of a centered grid in the wall-default state."""
    half_x, half_z = grid_half_extents(grid_x, grid_z)
    domain = ParticleChunk()
    for x in range(-half_x, half_x + 1):
        for z in range(-half_z, half_z + 1):
            domain.add(create_wall_default_cell((x, 0, z)))
    return domain


def grow_cascade(
    grid_x: int,
    grid_z: int,
    target_cells: int,
    prng: AleaPRNG,
    max_extra_branches: int = DEFAULT_MAX_EXTRA_BRANCHES,
) -> GrowthResult:
    """
    Cascade connections outward from the origin of a bounded grid.

    Args:
        grid_x: Odd domain width along X
        grid_z: Odd domain depth along Z
        target_cells: Desired connected cell count, clamped to the domain size
        prng: Random source owned by the caller
        max_extra_branches: Upper bound on extra edges pushed per connected cell

    Returns:
        GrowthResult with the connected chunk and the full domain
    """
    if target_cells < 1:
        raise ValueError(f"target_cells must be at least 1, got {target_cells}")
    if max_extra_branches < 0:
        raise ValueError(f"max_extra_branches must be >= 0, got {max_extra_branches}")

    domain = build_domain(grid_x, grid_z)
    half_x, half_z = grid_x // 2, grid_z // 2
    target = min(target_cells, grid_x * grid_z)

    logger.info(
        "Starting cascade growth",
        grid_x=grid_x,
        grid_z=grid_z,
        requested=target_cells,
        target=target,
    )

    def in_bounds(position: Position) -> bool:
        x, _, z = position
        return -half_x <= x <= half_x and -half_z <= z <= half_z

    connected: Set[Position] = {ORIGIN}
    adjacency: Dict[Position, List[Position]] = {ORIGIN: []}
    collapse_order = [CollapseStep(ORIGIN)]

    # Frontier entries are (source position, face, neighbor position)
    frontier: Deque[Tuple[Position, Face, Position]] = deque()
    for face in prng.shuffled(HORIZONTAL_FACES):
        nxt = neighbor_position(ORIGIN, face)
        if in_bounds(nxt):
            frontier.append((ORIGIN, face, nxt))

    discarded = 0
    while frontier and len(connected) < target:
        source_pos, face, target_pos = frontier.popleft()
        if target_pos in connected:
            discarded += 1
            continue

        cell = domain[target_pos]
        carve(domain[source_pos], face, cell, adjacency)
        connected.add(target_pos)
        entry_face = face.opposite
        collapse_order.append(CollapseStep(target_pos, entry_face))

        outward = prng.shuffled([f for f in HORIZONTAL_FACES if f != entry_face])
        extra = prng.randrange(max_extra_branches + 1)
        for branch_face in outward[:extra]:
            branch_pos = neighbor_position(target_pos, branch_face)
            if in_bounds(branch_pos) and branch_pos not in connected:
                frontier.append((target_pos, branch_face, branch_pos))

    fill_carves = 0
    if len(connected) < target:
        fill_carves = _fill_pass(domain, connected, adjacency, collapse_order, target, in_bounds, prng)

    chunk = ParticleChunk()
    for step in collapse_order:
        chunk.add(domain[step.position])

    result = GrowthResult(
        mode="cascade",
        chunk=chunk,
        domain=domain,
        adjacency=adjacency,
        collapse_order=collapse_order,
        requested_cells=target_cells,
        target_cells=target,
        bounds=(half_x, half_z),
        fill_carves=fill_carves,
    )
    logger.debug(
        "Cascade growth counters",
        frontier_discards=discarded,
        fill_carves=fill_carves,
    )
    _log_outcome(result)
    return result


def _fill_pass(domain, connected, adjacency, collapse_order, target, in_bounds, prng) -> int:
    """Greedily carve from connected cells into unconnected in-domain neighbours."""
    carved = 0
    progress = True
    while progress and len(connected) < target:
        progress = False
        for position in domain.positions():
            if len(connected) >= target:
                break
            if position not in connected:
                continue
            cell = domain[position]
            for face in prng.shuffled(HORIZONTAL_FACES):
                if len(connected) >= target:
                    break
                nxt = neighbor_position(position, face)
                if not in_bounds(nxt) or nxt in connected:
                    continue
                carve(cell, face, domain[nxt], adjacency)
                connected.add(nxt)
                collapse_order.append(CollapseStep(nxt, face.opposite))
                carved += 1
                progress = True
    return carved


def _log_outcome(result: GrowthResult) -> None:
    if result.under_target:
        logger.warning(
            "Growth stopped below target",
            mode=result.mode,
            achieved=result.achieved_cells,
            target=result.target_cells,
        )
    logger.info(
        "Growth complete",
        mode=result.mode,
        cells=result.achieved_cells,
        edges=sum(len(links) for links in result.adjacency.values()) // 2,
    )
