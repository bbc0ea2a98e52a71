"""Hand-built chunks shared by several test modules."""

from py_spp.core.alea_prng import AleaPRNG
from py_spp.core.growth import build_domain, carve
from py_spp.core.particle import HORIZONTAL_FACES, Face, ParticleChunk, create_wall_default_cell
from py_spp.core.resolver import resolve

CENTER = (0, 0, 0)


def carved_cross():
    """3 x 3 domain whose center is carved to its four orthogonal neighbours only."""
    domain = build_domain(3, 3)
    adjacency = {}
    center = domain[CENTER]
    for face in HORIZONTAL_FACES:
        carve(center, face, domain.neighbor(center, face), adjacency)
    return domain, adjacency


def resolved_cross(seed="cross"):
    domain, _ = carved_cross()
    return resolve(list(domain), AleaPRNG(seed))


def open_square():
    """2 x 2 block with all four internal faces carved (one loop)."""
    chunk = ParticleChunk()
    for x, z in ((0, 0), (1, 0), (0, 1), (1, 1)):
        chunk.add(create_wall_default_cell((x, 0, z)))
    adjacency = {}
    carve(chunk[(0, 0, 0)], Face.POS_X, chunk[(1, 0, 0)], adjacency)
    carve(chunk[(0, 0, 0)], Face.POS_Z, chunk[(0, 0, 1)], adjacency)
    carve(chunk[(1, 0, 0)], Face.POS_Z, chunk[(1, 0, 1)], adjacency)
    carve(chunk[(0, 0, 1)], Face.POS_X, chunk[(1, 0, 1)], adjacency)
    return chunk
