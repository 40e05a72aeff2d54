from .assembler import DocumentAssembler
from .builder import EntityBuilder, SectionBuilder
from .factory import EntityFactory
from .geometry import compute_extents, entity_vertices
from .sections import SectionParser

__all__ = [
    "SectionParser",
    "EntityFactory",
    "EntityBuilder",
    "SectionBuilder",
    "DocumentAssembler",
    "entity_vertices",
    "compute_extents",
]
