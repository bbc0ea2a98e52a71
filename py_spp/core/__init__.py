"""
Core particle generation functionality.
"""

from .alea_prng import AleaPRNG
from .particle import (
    ALL_IDS,
    HORIZONTAL_FACES,
    OPEN_IDS,
    OPTION_REGISTRY,
    WALL_IDS,
    DuplicatePositionError,
    Face,
    FaceOption,
    OptionKind,
    ParticleCell,
    ParticleChunk,
    ParticleInvariantError,
    collapse_cell,
    collapse_face,
    create_cell,
    create_wall_default_cell,
    resolved_option,
)
from .growth import CollapseStep, GrowthResult, grow_backtracking_maze, grow_cascade
from .resolver import collapse_chunk, find_symmetry_violations, repair_neighbors, resolve
from .pathfinding import find_path, path_steps
from .topology import TopologyStats, analyze_topology, chunk_to_arrays
from .maze_generator import MazeConfig, MazeResult, generate, generate_maze

__all__ = ['AleaPRNG', 'ALL_IDS', 'HORIZONTAL_FACES', 'OPEN_IDS', 'OPTION_REGISTRY', 'WALL_IDS',
           'DuplicatePositionError', 'Face', 'FaceOption', 'OptionKind', 'ParticleCell',
           'ParticleChunk', 'ParticleInvariantError', 'collapse_cell', 'collapse_face',
           'create_cell', 'create_wall_default_cell', 'resolved_option',
           'CollapseStep', 'GrowthResult', 'grow_backtracking_maze', 'grow_cascade',
           'collapse_chunk', 'find_symmetry_violations', 'repair_neighbors', 'resolve',
           'find_path', 'path_steps', 'TopologyStats', 'analyze_topology', 'chunk_to_arrays',
           'MazeConfig', 'MazeResult', 'generate', 'generate_maze']
