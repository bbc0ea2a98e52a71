"""
Particle cell data model and face option registry.

A ParticleCell is a unit cube with six faces. Each face carries a list of
candidate option ids: more than one candidate is superposition, exactly one
is a resolved face, and an empty list means the face takes no part in any
spatial relationship. A ParticleChunk holds cells keyed by integer position.
"""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from .alea_prng import AleaPRNG

Position = Tuple[int, int, int]


class ParticleInvariantError(ValueError):
    """Raised when a cell or chunk breaks a model invariant."""


class DuplicatePositionError(ParticleInvariantError):
    """Raised when two cells are inserted at the same position key."""


class Face(IntEnum):
    """Six axial face directions in fixed index order."""

    POS_X = 0
    NEG_X = 1
    POS_Y = 2
    NEG_Y = 3
    POS_Z = 4
    NEG_Z = 5

    @property
    def opposite(self) -> "Face":
        # Faces come in +/- pairs, so flipping the low bit swaps the sign.
        return Face(self.value ^ 1)

    @property
    def direction(self) -> Position:
        return FACE_DIRECTION[self]

    @property
    def is_horizontal(self) -> bool:
        return self not in (Face.POS_Y, Face.NEG_Y)


FACE_DIRECTION: Dict[Face, Position] = {
    Face.POS_X: (1, 0, 0),
    Face.NEG_X: (-1, 0, 0),
    Face.POS_Y: (0, 1, 0),
    Face.NEG_Y: (0, -1, 0),
    Face.POS_Z: (0, 0, 1),
    Face.NEG_Z: (0, 0, -1),
}

HORIZONTAL_FACES: Tuple[Face, ...] = (Face.POS_X, Face.NEG_X, Face.POS_Z, Face.NEG_Z)

FACE_COUNT = 6
ALL_FACES_MASK = 0b111111
HORIZONTAL_FACES_MASK = sum(1 << face for face in HORIZONTAL_FACES)


def neighbor_position(position: Position, face: Face) -> Position:
    """Position of the cell sharing ``face`` with the cell at ``position``."""
    dx, dy, dz = FACE_DIRECTION[face]
    x, y, z = position
    return (x + dx, y + dy, z + dz)


# Face option registry


class OptionKind(str, Enum):
    """Structural treatment family of a face option."""

    OPEN = "open"
    WALL = "wall"


@dataclass(frozen=True)
class FaceOption:
    """Registry entry describing one face option id."""

    id: int
    name: str
    kind: OptionKind
    color: int
    alpha: float = 1.0
    half_height: bool = False

    @property
    def is_open(self) -> bool:
        return self.kind is OptionKind.OPEN


OPTION_REGISTRY: Dict[int, FaceOption] = {
    option.id: option
    for option in (
        # Passages
        FaceOption(0, "Empty", OptionKind.OPEN, 0x000000, alpha=0.0),
        FaceOption(1, "Arch Door", OptionKind.OPEN, 0x8B7355),
        FaceOption(2, "Rectangular Door", OptionKind.OPEN, 0x6B5B45),
        # Barriers
        FaceOption(10, "Brick Wall", OptionKind.WALL, 0x8B4513),
        FaceOption(11, "Earth Wall", OptionKind.WALL, 0xA0855B),
        FaceOption(12, "Half-height Wall", OptionKind.WALL, 0x9E8E7E, half_height=True),
        FaceOption(13, "Green Hedge", OptionKind.WALL, 0x2D5A27),
    )
}

OPEN_IDS: Tuple[int, ...] = tuple(i for i, o in OPTION_REGISTRY.items() if o.kind is OptionKind.OPEN)
WALL_IDS: Tuple[int, ...] = tuple(i for i, o in OPTION_REGISTRY.items() if o.kind is OptionKind.WALL)
ALL_IDS: Tuple[int, ...] = OPEN_IDS + WALL_IDS

_OPEN_ID_SET = frozenset(OPEN_IDS)
_WALL_ID_SET = frozenset(WALL_IDS)


def get_option(option_id: int) -> FaceOption:
    """Look up a registry entry, raising KeyError for unknown ids."""
    return OPTION_REGISTRY[option_id]


def is_open_option(option_id: Optional[int]) -> bool:
    return option_id in _OPEN_ID_SET


def is_wall_option(option_id: Optional[int]) -> bool:
    return option_id in _WALL_ID_SET


# Cells and chunks


@dataclass
class ParticleCell:
    """
    One unit cell of a chunk.

    face_states bit i is set iff face i takes part in a spatial
    relationship; face_options[i] must be non-empty exactly when it is.
    """

    position: Position
    face_options: List[List[int]]
    face_states: int = HORIZONTAL_FACES_MASK
    size: Position = (1, 1, 1)

    def __post_init__(self):
        self.position = tuple(int(v) for v in self.position)
        self.size = tuple(int(v) for v in self.size)
        if len(self.position) != 3 or len(self.size) != 3:
            raise ParticleInvariantError(
                f"position and size must be 3-vectors, got {self.position} / {self.size}"
            )
        if len(self.face_options) != FACE_COUNT:
            raise ParticleInvariantError(
                f"cell at {self.position} needs {FACE_COUNT} face option lists, "
                f"got {len(self.face_options)}"
            )
        self.face_options = [list(options) for options in self.face_options]
        for face in Face:
            if self.participates(face) != bool(self.face_options[face]):
                raise ParticleInvariantError(
                    f"cell at {self.position}: face {face.name} state bit does not "
                    f"match its candidate list {self.face_options[face]}"
                )

    def participates(self, face: Face) -> bool:
        return bool(self.face_states >> face & 1)

    def is_resolved(self) -> bool:
        """True when every participating face holds exactly one option."""
        return all(len(options) == 1 for options in self.face_options if options)

    def copy(self) -> "ParticleCell":
        return ParticleCell(
            position=self.position,
            face_options=[list(options) for options in self.face_options],
            face_states=self.face_states,
            size=self.size,
        )


def _make_cell(position: Sequence[int], horizontal_ids: Sequence[int]) -> ParticleCell:
    face_options = [
        list(horizontal_ids) if face.is_horizontal else [] for face in Face
    ]
    return ParticleCell(position=tuple(position), face_options=face_options)


def create_cell(position: Sequence[int]) -> ParticleCell:
    """
    Create a cell in full superposition: every horizontal face may be anything.

    face_states is 0b110011 (horizontal faces only), not 0b111111. The
    vertical faces carry empty candidate lists, and an empty list must pair
    with a clear state bit.
    """
    return _make_cell(position, ALL_IDS)


def create_wall_default_cell(position: Sequence[int]) -> ParticleCell:
    """Create a cell whose horizontal faces are undecided walls, before carving."""
    return _make_cell(position, WALL_IDS)


def collapse_face(candidates: Sequence[int], prng: AleaPRNG) -> Optional[int]:
    """
    Pick one candidate uniformly at random.

    Args:
        candidates: Candidate option ids for a face
        prng: Random source owned by the caller

    Returns:
        The chosen option id, or None when there are no candidates
    """
    if not candidates:
        return None
    return prng.choice(candidates)


def collapse_cell(cell: ParticleCell, prng: AleaPRNG) -> ParticleCell:
    """Return a new cell with every participating face collapsed to one option."""
    face_options: List[List[int]] = []
    for face in Face:
        candidates = cell.face_options[face]
        if cell.participates(face) and not candidates:
            raise ParticleInvariantError(
                f"cannot collapse face {face.name} of cell {cell.position}: no candidates"
            )
        chosen = collapse_face(candidates, prng)
        face_options.append([] if chosen is None else [chosen])
    return ParticleCell(
        position=cell.position,
        face_options=face_options,
        face_states=cell.face_states,
        size=cell.size,
    )


def resolved_option(cell: ParticleCell, face: Face) -> Optional[int]:
    """Final option id for ``face``, or None if the face is not resolved."""
    options = cell.face_options[face]
    if len(options) == 1:
        return options[0]
    return None


@dataclass
class ParticleChunk:
    """Cells keyed by position. Insertion order is kept for reproducible iteration."""

    cells: Dict[Position, ParticleCell] = field(default_factory=dict)

    def add(self, cell: ParticleCell) -> ParticleCell:
        if cell.position in self.cells:
            raise DuplicatePositionError(f"a cell already exists at {cell.position}")
        self.cells[cell.position] = cell
        return cell

    def get(self, position: Position) -> Optional[ParticleCell]:
        return self.cells.get(tuple(position))

    def __getitem__(self, position: Position) -> ParticleCell:
        return self.cells[tuple(position)]

    def __contains__(self, position) -> bool:
        return tuple(position) in self.cells

    def __iter__(self) -> Iterator[ParticleCell]:
        return iter(self.cells.values())

    def __len__(self) -> int:
        return len(self.cells)

    def positions(self) -> List[Position]:
        return list(self.cells)

    def neighbor(self, cell: ParticleCell, face: Face) -> Optional[ParticleCell]:
        return self.cells.get(neighbor_position(cell.position, face))
