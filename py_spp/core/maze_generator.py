"""
Maze generation pipeline: grow, collapse, repair.

This is the entry point used by presentation code. It owns the PRNG for a
single call, hands the grown cells to the resolver and returns the
resolved chunk together with the order in which cells were connected.
"""

from dataclasses import dataclass
from typing import List, Literal, Optional, Tuple, Union

import structlog
from pydantic import BaseModel, Field, field_validator, model_validator

from ..config import settings
from ..utils.random import create_prng, resolve_seed
from .growth import CollapseStep, GrowthResult, grow_backtracking_maze, grow_cascade
from .particle import ParticleChunk, Position
from .resolver import resolve

logger = structlog.get_logger()


class MazeConfig(BaseModel):
    """Validated generation request."""

    mode: Literal["cascade", "backtrack"] = Field("cascade", description="Growth mode")
    grid_x: int = Field(settings.default_grid_x, ge=1, le=settings.max_grid_dim, description="Domain width (odd)")
    grid_z: int = Field(settings.default_grid_z, ge=1, le=settings.max_grid_dim, description="Domain depth (odd)")
    target_cells: Optional[int] = Field(
        None, ge=1, description="Target cell count; defaults depend on the mode"
    )
    max_extra_branches: int = Field(
        settings.max_extra_branches, ge=0, description="Extra cascade edges per connected cell"
    )
    seed: Optional[str] = Field(None, description="Random seed for reproducible generation")

    @field_validator("grid_x", "grid_z")
    @classmethod
    def _odd_extent(cls, value: int) -> int:
        if value % 2 == 0:
            raise ValueError("grid extents must be odd so the domain centers on the origin")
        return value

    @model_validator(mode="after")
    def _default_target(self) -> "MazeConfig":
        if self.target_cells is None:
            if self.mode == "backtrack":
                self.target_cells = settings.default_maze_cells
            else:
                self.target_cells = settings.default_target_cells
        return self


@dataclass
class MazeResult:
    """Resolved chunk plus the data presentation code needs for staged reveal."""

    resolved: ParticleChunk
    growth: GrowthResult
    seed: str

    @property
    def collapse_order(self) -> List[Position]:
        return self.growth.order_keys()

    @property
    def collapse_steps(self) -> List[CollapseStep]:
        return self.growth.collapse_order

    @property
    def cell_count(self) -> int:
        return len(self.resolved)


def generate_maze(config: MazeConfig) -> MazeResult:
    """
    Run the full pipeline for a validated request.

    Args:
        config: Generation request

    Returns:
        MazeResult with the resolved chunk and its collapse order
    """
    seed = resolve_seed(config.seed)
    prng = create_prng(seed)
    logger.info("Generating maze", mode=config.mode, seed=seed)

    if config.mode == "backtrack":
        growth = grow_backtracking_maze(config.target_cells, prng)
    else:
        growth = grow_cascade(
            config.grid_x,
            config.grid_z,
            config.target_cells,
            prng,
            max_extra_branches=config.max_extra_branches,
        )

    # Collapse in connection order so the draw sequence depends only on the seed
    cells = [growth.chunk[position] for position in growth.order_keys()]
    resolved = resolve(cells, prng)

    logger.info("Maze generated", cells=len(resolved), seed=seed, prng_calls=prng.call_count)
    return MazeResult(resolved=resolved, growth=growth, seed=seed)


def generate(
    dims: Union[int, Tuple[int, int]],
    target_cells: Optional[int] = None,
    seed: Optional[Union[str, int]] = None,
) -> MazeResult:
    """
    Convenience wrapper choosing the growth mode from ``dims``.

    Args:
        dims: A target count for backtracking growth, or a (grid_x, grid_z)
            pair for cascade growth
        target_cells: Cascade target; for backtracking it overrides ``dims``
        seed: Optional seed for reproducible output

    Returns:
        MazeResult
    """
    seed = None if seed is None else str(seed)
    if isinstance(dims, int):
        config = MazeConfig(
            mode="backtrack",
            target_cells=target_cells if target_cells is not None else dims,
            seed=seed,
        )
    else:
        grid_x, grid_z = dims
        config = MazeConfig(
            mode="cascade",
            grid_x=grid_x,
            grid_z=grid_z,
            target_cells=target_cells if target_cells is not None else grid_x * grid_z,
            seed=seed,
        )
    return generate_maze(config)
