"""Header assembler for ccgen

Combines rendered entities into complete header text. Sections are
always emitted in the same order so the include guard wraps the
dialect wrapping, which in turn wraps the declarations.
"""

from typing import List, Optional

from ccgen.core.types import HeaderDescriptor
from ccgen.generators.entity_renderer import EntityRenderer


class HeaderGenerator:
    """Generates complete header text from a HeaderDescriptor

    Output layout (blank line after every section):
        guard open            (only with a guard)
        dialect open
        typedefs
        macros
        functions
        extra                 (only if present)
        dialect close
        guard close           (only with a guard)
        post_extra            (only if present)

    Usage:
        gen = HeaderGenerator()
        text = gen.generate_header(descriptor)
        with open("include/foo.h", "w") as f:
            f.write(text)
    """

    def __init__(self, renderer: Optional[EntityRenderer] = None) -> None:
        """Initialize header generator

        Args:
            renderer: EntityRenderer to use (default: None creates new renderer)
        """
        self._renderer = renderer if renderer is not None else EntityRenderer()

    def generate_header(self, descriptor: HeaderDescriptor) -> str:
        """Generate complete header file content

        Empty sections still get their blank line, so an empty typedef
        list shows up as a lone "\\n".

        Args:
            descriptor: Header to render

        Returns:
            Header file content as string
        """
        sections: List[str] = []

        if descriptor.guard is not None:
            sections.append(self._renderer.render_guard_open(descriptor.guard))

        sections.append(self._renderer.render_dialect_open(descriptor.dialect))
        sections.append(self._generate_typedefs(descriptor))
        sections.append(self._generate_macros(descriptor))
        sections.append(self._generate_functions(descriptor))

        if descriptor.extra is not None:
            sections.append(descriptor.extra)

        sections.append(self._renderer.render_dialect_close(descriptor.dialect))

        if descriptor.guard is not None:
            sections.append(self._renderer.render_guard_close(descriptor.guard))

        if descriptor.post_extra is not None:
            sections.append(descriptor.post_extra)

        return "".join(section + "\n" for section in sections)

    def _generate_typedefs(self, descriptor: HeaderDescriptor) -> str:
        return "".join(self._renderer.render_typedef(t) for t in descriptor.typedefs)

    def _generate_macros(self, descriptor: HeaderDescriptor) -> str:
        return "".join(self._renderer.render_macro(m) for m in descriptor.macros)

    def _generate_functions(self, descriptor: HeaderDescriptor) -> str:
        return "".join(self._renderer.render_function(f) for f in descriptor.functions)


def generate_header(descriptor: HeaderDescriptor) -> str:
    """Render a descriptor with a default HeaderGenerator"""
    return HeaderGenerator().generate_header(descriptor)
