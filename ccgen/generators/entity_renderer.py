"""Entity renderer for ccgen

Turns each header entity into its single C source fragment. Every
fragment ends with a newline; caller-supplied text is passed through
verbatim, without escaping or identifier checks.
"""

from typing import Union

from ccgen.core.literals import Literal
from ccgen.core.types import (
    Arity,
    DialectMode,
    FunctionDecl,
    HeaderGuard,
    MacroDecl,
    TypedefDecl,
    Value,
)


Entity = Union[TypedefDecl, MacroDecl, FunctionDecl, HeaderGuard, DialectMode]


class EntityRenderer:
    """Renders header entities to C text

    Usage:
        renderer = EntityRenderer()
        renderer.render(MacroDecl("H", "1"))       # "#define H 1\\n"
        renderer.render_guard_close(guard)         # "#endif\\n"
    """

    _DIALECT_OPEN = {
        DialectMode.C_LANGUAGE_ONLY: (
            "#ifdef __cplusplus\n"
            "#error \"This header can only be used by C\"\n"
            "#endif\n"
        ),
        DialectMode.C_AND_CXX: (
            "#ifdef __cplusplus\n"
            "extern \"C\" {\n"
            "#endif\n"
        ),
        DialectMode.CXX_ONLY: (
            "#ifndef __cplusplus\n"
            "#error \"This header can only be used by C++\"\n"
            "#endif\n"
        ),
    }

    # the #error blocks are self-contained, only extern "C" needs closing
    _DIALECT_CLOSE = {
        DialectMode.C_LANGUAGE_ONLY: "",
        DialectMode.C_AND_CXX: (
            "#ifdef __cplusplus\n"
            "}\n"
            "#endif\n"
        ),
        DialectMode.CXX_ONLY: "",
    }

    def render(self, entity: Entity) -> str:
        """Render the opening fragment of any entity

        Args:
            entity: Typedef, macro, function, guard or dialect mode

        Returns:
            C source fragment

        Raises:
            TypeError: If entity is not a header entity
        """
        if isinstance(entity, TypedefDecl):
            return self.render_typedef(entity)
        elif isinstance(entity, MacroDecl):
            return self.render_macro(entity)
        elif isinstance(entity, FunctionDecl):
            return self.render_function(entity)
        elif isinstance(entity, HeaderGuard):
            return self.render_guard_open(entity)
        elif isinstance(entity, DialectMode):
            return self.render_dialect_open(entity)
        raise TypeError(f"Cannot render {type(entity).__name__} as a header entity")

    def render_close(self, entity: Union[HeaderGuard, DialectMode]) -> str:
        """Render the closing fragment of a wrapping entity

        Raises:
            TypeError: If entity does not wrap anything
        """
        if isinstance(entity, HeaderGuard):
            return self.render_guard_close(entity)
        elif isinstance(entity, DialectMode):
            return self.render_dialect_close(entity)
        raise TypeError(f"{type(entity).__name__} has no closing fragment")

    def render_typedef(self, typedef: TypedefDecl) -> str:
        return f"typedef {typedef.type} {typedef.name};\n"

    def render_macro(self, macro: MacroDecl) -> str:
        return f"#define {macro.token} {self._value_text(macro.value)}\n"

    def render_function(self, func: FunctionDecl) -> str:
        """Render a function prototype

        The ellipsis is preceded by ", " unless the parameter list is empty:
            int printf(const char*, ...);
            void q(...);
        """
        params = list(func.params)
        if func.arity == Arity.VARIADIC:
            params.append("...")
        return f"{func.return_type} {func.name}({', '.join(params)});\n"

    def render_guard_open(self, guard: HeaderGuard) -> str:
        value = self._value_text(guard.value)
        return f"#ifndef {guard.token}\n#define {guard.token} {value}\n"

    def render_guard_close(self, guard: HeaderGuard) -> str:
        return "#endif\n"

    def render_dialect_open(self, dialect: DialectMode) -> str:
        return self._DIALECT_OPEN[dialect]

    def render_dialect_close(self, dialect: DialectMode) -> str:
        return self._DIALECT_CLOSE[dialect]

    @staticmethod
    def _value_text(value: Value) -> str:
        if isinstance(value, Literal):
            return value.c_literal()
        return value
