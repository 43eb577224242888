"""Naming helpers for ccgen

Derives conventional include-guard tokens and include paths from a
header's location. Nothing here validates identifiers; it only builds
names when the caller asks for one.
"""

import re
from typing import Optional

from ccgen.core.types import HeaderDescriptor


class NamingScheme:
    """Builds C identifiers for header bookkeeping"""

    @staticmethod
    def sanitize(text: str) -> str:
        """Convert arbitrary text to an upper-case C identifier fragment

        Args:
            text: Path or file name (e.g., "sys/my-types.h")

        Returns:
            Sanitized string (e.g., "SYS_MY_TYPES_H")
        """
        if not text:
            return ""

        normalized = re.sub(r"[^0-9A-Za-z_]", "_", text)
        normalized = re.sub(r"_{2,}", "_", normalized).strip("_")
        return normalized.upper()

    @staticmethod
    def guard_token(name: str, path: Optional[str] = None) -> str:
        """Generate an include-guard macro name for a header

        Args:
            name: Header file name (e.g., "bar.h")
            path: Directory relative to the include root (e.g., "foo")

        Returns:
            Guard token (e.g., "FOO_BAR_H")
        """
        token = NamingScheme.sanitize(f"{path}/{name}" if path else name)
        if not token or token[0].isdigit():
            token = f"_{token}"
        return token

    @staticmethod
    def include_path(descriptor: HeaderDescriptor) -> str:
        """Path of the header relative to the include root

        Leading, doubled and trailing separators are dropped, so "/usr"
        is treated as "usr" under the include root.

        Returns:
            "path/name", or just "name" without a path

        Raises:
            ValueError: If the path climbs out of the include root ("..")
                or names no file
        """
        joined = f"{descriptor.path}/{descriptor.name}" if descriptor.path else descriptor.name

        parts = []
        for part in re.split(r"[\\/]+", joined):
            if part in ("", "."):
                continue
            if part == "..":
                raise ValueError(f"Include path {joined!r} leaves the include root")
            parts.append(part)

        if not parts:
            raise ValueError(f"Include path {joined!r} names no file")
        return "/".join(parts)
