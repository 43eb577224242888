"""ccgen.generators package

Renderers turning the header model into C source text.
"""

from .entity_renderer import EntityRenderer
from .header_generator import HeaderGenerator, generate_header
from .naming import NamingScheme

__all__ = [
    "EntityRenderer",
    "HeaderGenerator",
    "NamingScheme",
    "generate_header",
]
