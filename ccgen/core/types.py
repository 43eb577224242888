"""Header data model for ccgen

Defines the entities a C header is built from: typedefs, macros,
function declarations, the include guard and the dialect mode.
Every entity is a frozen dataclass; sequences are stored as tuples,
so a HeaderDescriptor never changes after construction.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

from ccgen.core.literals import Literal


Value = Union[str, Literal]


class DialectMode(Enum):
    """Which language(s) may include the header"""

    C_LANGUAGE_ONLY = "c"
    C_AND_CXX = "cxx"  # default, extern "C" wrapping
    CXX_ONLY = "cxx_only"


class Arity(Enum):
    """Whether a function takes a fixed or a variable parameter count"""

    FIXED = "fixed"
    VARIADIC = "variadic"


@dataclass(frozen=True)
class TypedefDecl:
    """typedef <type> <name>;"""

    name: str
    type: str


@dataclass(frozen=True)
class MacroDecl:
    """#define <token> <value>

    Attributes:
        token: Macro token, including the parameter list for function macros
        value: Replacement text, or a Literal to be spelled by the formatter
    """

    token: str
    value: Value


@dataclass(frozen=True)
class FunctionDecl:
    """Function prototype

    Attributes:
        return_type: Return type spelling
        name: Function name
        params: Parameter type spellings, in order
        arity: FIXED or VARIADIC (trailing ...)
    """

    return_type: str
    name: str
    params: Tuple[str, ...] = ()
    arity: Arity = Arity.FIXED

    def __post_init__(self) -> None:
        object.__setattr__(self, "params", tuple(self.params))


@dataclass(frozen=True)
class HeaderGuard:
    """#ifndef/#define/#endif guard; value may be empty"""

    token: str
    value: Value = ""


@dataclass(frozen=True)
class HeaderDescriptor:
    """Root entity describing one header file

    Attributes:
        name: File name of the header (e.g., "stdio.h")
        path: Directory relative to the include root, if any
        guard: Include guard, or None for an unguarded header
        functions: Function declarations, emitted in order
        macros: Macro definitions, emitted in order
        typedefs: Typedefs, emitted in order
        dialect: Language support wrapping
        extra: Text emitted after the declarations, inside the guard
        post_extra: Text emitted after the guard closes
    """

    name: str
    path: Optional[str] = None
    guard: Optional[HeaderGuard] = None
    functions: Tuple[FunctionDecl, ...] = ()
    macros: Tuple[MacroDecl, ...] = ()
    typedefs: Tuple[TypedefDecl, ...] = ()
    dialect: DialectMode = DialectMode.C_AND_CXX
    extra: Optional[str] = None
    post_extra: Optional[str] = None

    def __post_init__(self) -> None:
        # accept any iterable from callers, keep an immutable copy
        for name in ("functions", "macros", "typedefs"):
            object.__setattr__(self, name, tuple(getattr(self, name)))
