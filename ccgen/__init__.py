"""ccgen - render C headers from a structural model

Typical use:

    from ccgen import HeaderDescriptor, MacroDecl, generate_header

    header = HeaderDescriptor(name="config.h", macros=[MacroDecl("VERSION", "3")])
    text = generate_header(header)
"""

from ccgen.core.literals import Literal, LiteralFormatter, LiteralKind
from ccgen.core.types import (
    Arity,
    DialectMode,
    FunctionDecl,
    HeaderDescriptor,
    HeaderGuard,
    MacroDecl,
    TypedefDecl,
)
from ccgen.core.serialization import (
    DescriptorError,
    descriptor_from_dict,
    descriptor_to_dict,
    dump_descriptor,
    load_descriptor,
)
from ccgen.generators import EntityRenderer, HeaderGenerator, NamingScheme, generate_header

__version__ = "0.1.0"

__all__ = [
    "Arity",
    "DescriptorError",
    "DialectMode",
    "EntityRenderer",
    "FunctionDecl",
    "HeaderDescriptor",
    "HeaderGenerator",
    "HeaderGuard",
    "Literal",
    "LiteralFormatter",
    "LiteralKind",
    "MacroDecl",
    "NamingScheme",
    "TypedefDecl",
    "descriptor_from_dict",
    "descriptor_to_dict",
    "dump_descriptor",
    "generate_header",
    "load_descriptor",
]
