"""Persisted form of the header model

Maps HeaderDescriptor trees to plain dicts and back, and reads/writes
them as YAML so descriptors can be built by out-of-process tooling.
JSON documents load through the same path.

Files are read with yaml.BaseLoader: every scalar stays the exact text
the author wrote (NULL, ON, 0x1F, 1.50), and only literal values are
converted, according to their kind.
"""

from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml

from ccgen.core.literals import Literal, LiteralKind
from ccgen.core.types import (
    Arity,
    DialectMode,
    FunctionDecl,
    HeaderDescriptor,
    HeaderGuard,
    MacroDecl,
    TypedefDecl,
    Value,
)


class DescriptorError(ValueError):
    """Raised when a persisted descriptor cannot be turned into a model"""


def descriptor_to_dict(descriptor: HeaderDescriptor) -> Dict[str, Any]:
    """Convert a descriptor to a plain dict

    Args:
        descriptor: Header model

    Returns:
        Dict using the model's field names, enums as their values
    """
    guard = None
    if descriptor.guard is not None:
        guard = {
            "token": descriptor.guard.token,
            "value": _value_to_data(descriptor.guard.value),
        }

    return {
        "path": descriptor.path,
        "name": descriptor.name,
        "guard": guard,
        "functions": [
            {
                "return_type": f.return_type,
                "name": f.name,
                "params": list(f.params),
                "arity": f.arity.value,
            }
            for f in descriptor.functions
        ],
        "macros": [
            {"token": m.token, "value": _value_to_data(m.value)}
            for m in descriptor.macros
        ],
        "typedefs": [
            {"name": t.name, "type": t.type}
            for t in descriptor.typedefs
        ],
        "dialect": descriptor.dialect.value,
        "extra": descriptor.extra,
        "post_extra": descriptor.post_extra,
    }


def descriptor_from_dict(data: Mapping[str, Any]) -> HeaderDescriptor:
    """Build a descriptor from a plain mapping

    Omitted optional fields take their defaults.

    Args:
        data: Mapping as produced by descriptor_to_dict()

    Returns:
        HeaderDescriptor

    Raises:
        DescriptorError: If a field is missing, mistyped or has an unknown value
    """
    if not isinstance(data, Mapping):
        raise DescriptorError(f"descriptor must be a mapping, got {type(data).__name__}")

    guard = None
    if data.get("guard") is not None:
        guard_data = _mapping(data["guard"], "guard")
        guard = HeaderGuard(
            token=_text(guard_data, "token", "guard"),
            value=_value_from_data(guard_data.get("value", ""), "guard.value"),
        )

    functions = []
    for i, item in enumerate(_sequence(data, "functions")):
        where = f"functions[{i}]"
        item = _mapping(item, where)
        params = item.get("params")
        if params is None or params == "":
            params = []
        if not isinstance(params, list):
            raise DescriptorError(f"{where}.params must be a list")
        for j, param in enumerate(params):
            if not isinstance(param, str):
                raise DescriptorError(
                    f"{where}.params[{j}] must be text, got {type(param).__name__}"
                )
        functions.append(FunctionDecl(
            return_type=_text(item, "return_type", where),
            name=_text(item, "name", where),
            params=tuple(params),
            arity=_enum(Arity, item.get("arity", Arity.FIXED.value), f"{where}.arity"),
        ))

    macros = []
    for i, item in enumerate(_sequence(data, "macros")):
        where = f"macros[{i}]"
        item = _mapping(item, where)
        if "value" not in item:
            raise DescriptorError(f"{where}: missing field 'value'")
        macros.append(MacroDecl(
            token=_text(item, "token", where),
            value=_value_from_data(item["value"], f"{where}.value"),
        ))

    typedefs = []
    for i, item in enumerate(_sequence(data, "typedefs")):
        where = f"typedefs[{i}]"
        item = _mapping(item, where)
        typedefs.append(TypedefDecl(
            name=_text(item, "name", where),
            type=_text(item, "type", where),
        ))

    return HeaderDescriptor(
        name=_text(data, "name", "descriptor"),
        path=_optional_text(data, "path"),
        guard=guard,
        functions=functions,
        macros=macros,
        typedefs=typedefs,
        dialect=_enum(DialectMode, data.get("dialect", DialectMode.C_AND_CXX.value), "dialect"),
        extra=_optional_text(data, "extra"),
        post_extra=_optional_text(data, "post_extra"),
    )


def load_descriptor(path: Path) -> HeaderDescriptor:
    """Load a descriptor from a YAML (or JSON) file

    Raises:
        FileNotFoundError: If path doesn't exist
        OSError: If path cannot be read (e.g., it is a directory)
        UnicodeDecodeError: If the file is not UTF-8
        yaml.YAMLError: If the file is not valid YAML
        DescriptorError: If the document doesn't describe a header
    """
    if not path.exists():
        raise FileNotFoundError(f"Descriptor file not found: {path}")

    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.load(f, Loader=yaml.BaseLoader)

    if data is None or data == "":
        raise DescriptorError(f"{path} is empty")
    return descriptor_from_dict(data)


def dump_descriptor(descriptor: HeaderDescriptor, path: Path) -> None:
    """Write a descriptor to a YAML file, keeping field order

    Unset optional fields are left out, since the loader reads every
    scalar (including "null") as text.
    """
    data = {key: value for key, value in descriptor_to_dict(descriptor).items() if value is not None}
    with open(path, 'w', encoding='utf-8') as f:
        yaml.safe_dump(data, f, sort_keys=False)


def _value_to_data(value: Value) -> Any:
    if isinstance(value, Literal):
        return {"kind": value.kind.value, "value": value.value}
    return value


def _value_from_data(data: Any, where: str) -> Value:
    if isinstance(data, Mapping):
        if "kind" not in data or "value" not in data:
            raise DescriptorError(f"{where}: literal needs 'kind' and 'value'")
        kind = _enum(LiteralKind, data["kind"], f"{where}.kind")
        return Literal(kind, _literal_value(kind, data["value"], f"{where}.value"))
    if data is None:
        return ""
    if not isinstance(data, str):
        raise DescriptorError(f"{where} must be text, got {type(data).__name__}")
    return data


_INTEGER_KINDS = (
    LiteralKind.U64, LiteralKind.U32, LiteralKind.U16, LiteralKind.U8,
    LiteralKind.I64, LiteralKind.I32, LiteralKind.I16, LiteralKind.I8,
    LiteralKind.ADDRESS,
)


def _literal_value(kind: LiteralKind, value: Any, where: str) -> Any:
    """Convert a persisted literal value to the Python type its kind needs

    Text from YAML files is parsed here; integers accept 0x/0o/0b prefixes.
    """
    if value is None or isinstance(value, bool):
        raise DescriptorError(f"{where}: invalid {kind.value} value {value!r}")

    if kind in _INTEGER_KINDS:
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            try:
                return int(value.strip(), 0)
            except ValueError:
                pass
        raise DescriptorError(f"{where}: invalid {kind.value} value {value!r}")

    if kind in (LiteralKind.F32, LiteralKind.F64):
        if isinstance(value, (int, float)):
            return float(value)
        if isinstance(value, str):
            try:
                return float(value)
            except ValueError:
                pass
        raise DescriptorError(f"{where}: invalid {kind.value} value {value!r}")

    if kind == LiteralKind.CHAR:
        if isinstance(value, str) and len(value) == 1:
            return value
        if isinstance(value, int) and 0 <= value <= 0x10FFFF:
            return value
        raise DescriptorError(f"{where}: char needs a single character, got {value!r}")

    if not isinstance(value, str):
        raise DescriptorError(f"{where}: invalid {kind.value} value {value!r}")
    return value


def _mapping(data: Any, where: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise DescriptorError(f"{where} must be a mapping, got {type(data).__name__}")
    return data


def _sequence(data: Mapping[str, Any], key: str) -> List[Any]:
    items = data.get(key)
    if items is None or items == "":
        return []
    if not isinstance(items, list):
        raise DescriptorError(f"{key} must be a list, got {type(items).__name__}")
    return items


def _text(data: Mapping[str, Any], key: str, where: str) -> str:
    if data.get(key) is None:
        raise DescriptorError(f"{where}: missing field '{key}'")
    value = data[key]
    if not isinstance(value, str):
        raise DescriptorError(f"{where}.{key} must be text, got {type(value).__name__}")
    return value


def _optional_text(data: Mapping[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise DescriptorError(f"{key} must be text, got {type(value).__name__}")
    return value


def _enum(enum_cls, value: Any, where: str):
    try:
        return enum_cls(value)
    except ValueError:
        choices = ", ".join(member.value for member in enum_cls)
        raise DescriptorError(f"{where}: unknown value {value!r} (expected one of: {choices})")
