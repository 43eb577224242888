"""Tests for the persisted descriptor form"""

import json
import pytest
import yaml
from ccgen.core.literals import Literal, LiteralKind
from ccgen.core.serialization import (
    DescriptorError,
    descriptor_from_dict,
    descriptor_to_dict,
    dump_descriptor,
    load_descriptor,
)
from ccgen.core.types import (
    Arity,
    DialectMode,
    FunctionDecl,
    HeaderDescriptor,
    HeaderGuard,
    MacroDecl,
    TypedefDecl,
)
from ccgen.generators.header_generator import generate_header


@pytest.fixture
def descriptor():
    return HeaderDescriptor(
        name="stdio.h",
        path="libc",
        guard=HeaderGuard("STDIO_H", "1"),
        functions=[
            FunctionDecl("int", "printf", ["const char*"], Arity.VARIADIC),
            FunctionDecl("int", "getchar"),
        ],
        macros=[MacroDecl("EOF", "(-1)"), MacroDecl("BUFSIZ", Literal(LiteralKind.U32, 8192))],
        typedefs=[TypedefDecl("size_t", "unsigned long")],
        dialect=DialectMode.C_LANGUAGE_ONLY,
        extra="struct FILE;",
        post_extra="/* end */",
    )


class TestDescriptorToDict:
    """Test descriptor_to_dict()"""

    def test_field_names(self, descriptor):
        data = descriptor_to_dict(descriptor)
        assert list(data) == [
            "path", "name", "guard", "functions", "macros",
            "typedefs", "dialect", "extra", "post_extra",
        ]

    def test_enums_use_values(self, descriptor):
        data = descriptor_to_dict(descriptor)
        assert data["dialect"] == "c"
        assert data["functions"][0]["arity"] == "variadic"
        assert data["functions"][1]["params"] == []

    def test_literal_value(self, descriptor):
        data = descriptor_to_dict(descriptor)
        assert data["macros"][1]["value"] == {"kind": "u32", "value": 8192}

    def test_dict_round_trip(self, descriptor):
        assert descriptor_from_dict(descriptor_to_dict(descriptor)) == descriptor


class TestDescriptorFromDict:
    """Test descriptor_from_dict()"""

    def test_minimal_document(self):
        header = descriptor_from_dict({"name": "a.h"})
        assert header == HeaderDescriptor(name="a.h")

    def test_function_defaults_to_fixed(self):
        header = descriptor_from_dict({
            "name": "a.h",
            "functions": [{"return_type": "void", "name": "f"}],
        })
        assert header.functions[0] == FunctionDecl("void", "f", (), Arity.FIXED)

    def test_non_text_macro_value_rejected(self):
        """Text fields must be str; an int would be re-spelled"""
        with pytest.raises(DescriptorError, match=r"macros\[0\]\.value must be text"):
            descriptor_from_dict({"name": "a.h", "macros": [{"token": "H", "value": 1}]})

    def test_non_text_token_rejected(self):
        with pytest.raises(DescriptorError, match="token must be text"):
            descriptor_from_dict({"name": "a.h", "macros": [{"token": True, "value": "1"}]})

    def test_non_text_param_rejected(self):
        with pytest.raises(DescriptorError, match=r"params\[1\]"):
            descriptor_from_dict({
                "name": "a.h",
                "functions": [{"return_type": "int", "name": "f", "params": ["int", 3]}],
            })

    @pytest.mark.parametrize("kind,raw,expected", [
        ("u64", "12", 12),
        ("u32", "0x1F", 31),
        ("i64", "-12", -12),
        ("address", "0x1234abcd", 0x1234ABCD),
        ("f32", "1.3", 1.3),
        ("f64", "-1", -1.0),
        ("f64", "nan", None),
        ("char", "a", "a"),
        ("str", "hello", "hello"),
    ])
    def test_literal_value_converted_by_kind(self, kind, raw, expected):
        header = descriptor_from_dict({
            "name": "a.h",
            "macros": [{"token": "X", "value": {"kind": kind, "value": raw}}],
        })
        literal = header.macros[0].value
        assert literal.kind == LiteralKind(kind)
        if expected is None:
            assert literal.value != literal.value
        else:
            assert literal.value == expected

    @pytest.mark.parametrize("kind,raw", [
        ("u64", "abc"),
        ("u64", None),
        ("i32", True),
        ("f32", "x"),
        ("char", -1),
        ("char", "ab"),
        ("str", 5),
    ])
    def test_bad_literal_value_rejected(self, kind, raw):
        with pytest.raises(DescriptorError, match=r"macros\[0\]\.value"):
            descriptor_from_dict({
                "name": "a.h",
                "macros": [{"token": "X", "value": {"kind": kind, "value": raw}}],
            })

    def test_guard_without_value(self):
        header = descriptor_from_dict({"name": "a.h", "guard": {"token": "A_H"}})
        assert header.guard == HeaderGuard("A_H", "")

    def test_missing_name(self):
        with pytest.raises(DescriptorError, match="name"):
            descriptor_from_dict({"macros": []})

    def test_unknown_dialect(self):
        with pytest.raises(DescriptorError, match="dialect"):
            descriptor_from_dict({"name": "a.h", "dialect": "rust"})

    def test_unknown_arity(self):
        with pytest.raises(DescriptorError, match=r"functions\[0\]\.arity"):
            descriptor_from_dict({
                "name": "a.h",
                "functions": [{"return_type": "int", "name": "f", "arity": "many"}],
            })

    def test_unknown_literal_kind(self):
        with pytest.raises(DescriptorError, match="kind"):
            descriptor_from_dict({
                "name": "a.h",
                "macros": [{"token": "X", "value": {"kind": "u128", "value": 1}}],
            })

    def test_macros_must_be_list(self):
        with pytest.raises(DescriptorError, match="macros"):
            descriptor_from_dict({"name": "a.h", "macros": {"token": "X"}})

    def test_macro_needs_value(self):
        with pytest.raises(DescriptorError, match="value"):
            descriptor_from_dict({"name": "a.h", "macros": [{"token": "X"}]})

    def test_not_a_mapping(self):
        with pytest.raises(DescriptorError):
            descriptor_from_dict(["a.h"])

    def test_descriptor_error_is_value_error(self):
        assert issubclass(DescriptorError, ValueError)


class TestDescriptorFiles:
    """Test load_descriptor() and dump_descriptor()"""

    def test_yaml_file_round_trip(self, descriptor, tmp_path):
        path = tmp_path / "stdio.yaml"
        dump_descriptor(descriptor, path)
        assert load_descriptor(path) == descriptor

    def test_dump_keeps_field_order(self, descriptor, tmp_path):
        path = tmp_path / "stdio.yaml"
        dump_descriptor(descriptor, path)
        data = yaml.safe_load(path.read_text())
        assert list(data)[:2] == ["path", "name"]

    def test_load_json(self, tmp_path):
        path = tmp_path / "h.json"
        path.write_text(json.dumps({
            "name": "h.h",
            "typedefs": [{"name": "size_t", "type": "unsigned long"}],
            "macros": [{"token": "H", "value": "1"}],
            "functions": [{"return_type": "int", "name": "printf",
                           "params": ["const char*"], "arity": "variadic"}],
        }))
        header = load_descriptor(path)
        text = generate_header(header)

        assert "typedef unsigned long size_t;\n" in text
        assert "int printf(const char*, ...);\n" in text

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_descriptor(tmp_path / "nope.yaml")

    def test_load_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        with pytest.raises(DescriptorError):
            load_descriptor(path)

    def test_yaml_scalars_stay_verbatim(self, tmp_path):
        """Bare YAML scalars are not resolved to bool, int, float or null"""
        path = tmp_path / "flags.yaml"
        path.write_text(
            "name: flags.h\n"
            "macros:\n"
            "  - token: MASK\n"
            "    value: 0x1F\n"
            "  - token: ON\n"
            "    value: yes\n"
            "  - token: F\n"
            "    value: 1.50\n"
            "  - token: NULL\n"
            "    value: ((void*)0)\n"
            "  - token: EMPTY\n"
            "    value: null\n"
        )
        text = generate_header(load_descriptor(path))

        assert (
            "#define MASK 0x1F\n"
            "#define ON yes\n"
            "#define F 1.50\n"
            "#define NULL ((void*)0)\n"
            "#define EMPTY null\n"
        ) in text

    def test_yaml_literal_values_converted(self, tmp_path):
        path = tmp_path / "lits.yaml"
        path.write_text(
            "name: lits.h\n"
            "macros:\n"
            "  - token: BIG\n"
            "    value: {kind: u64, value: 0x10}\n"
            "  - token: SCALE\n"
            "    value: {kind: f32, value: 1.3}\n"
        )
        text = generate_header(load_descriptor(path))

        assert "#define BIG 16UL\n#define SCALE 1.3F\n" in text

    def test_yaml_bad_literal_value(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text(
            "name: bad.h\n"
            "macros:\n"
            "  - token: X\n"
            "    value: {kind: u64, value: abc}\n"
        )
        with pytest.raises(DescriptorError, match="invalid u64 value 'abc'"):
            load_descriptor(path)

    def test_round_trip_with_unset_fields(self, tmp_path):
        """None fields are left out of the file rather than written as null"""
        header = HeaderDescriptor(name="bare.h", macros=[MacroDecl("NULL", "0")])
        path = tmp_path / "bare.yaml"
        dump_descriptor(header, path)

        assert "null" not in path.read_text()
        assert load_descriptor(path) == header
