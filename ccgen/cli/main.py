"""Main CLI entry point for ccgen"""

import sys
import argparse
import traceback
from dataclasses import replace
from pathlib import Path
from typing import List, Optional, Tuple

import yaml

from ccgen.core.serialization import DescriptorError, load_descriptor
from ccgen.core.types import DialectMode, HeaderDescriptor, HeaderGuard
from ccgen.generators.header_generator import HeaderGenerator
from ccgen.generators.naming import NamingScheme


def render_file(
    descriptor_file: Path,
    dialect: Optional[DialectMode] = None,
    auto_guard: bool = False,
) -> Tuple[str, HeaderDescriptor]:
    """Load a descriptor file and render its header

    Args:
        descriptor_file: Path to YAML/JSON descriptor
        dialect: Optional dialect overriding the descriptor's own
        auto_guard: If True, add a derived guard when none is configured

    Returns:
        Tuple of (header text, descriptor actually rendered)

    Raises:
        FileNotFoundError: If descriptor_file doesn't exist
        yaml.YAMLError: If the file is not valid YAML
        OSError: If descriptor_file cannot be read
        UnicodeDecodeError: If descriptor_file is not UTF-8
        DescriptorError: If the file doesn't describe a header
    """
    descriptor = load_descriptor(descriptor_file)

    if dialect is not None:
        descriptor = replace(descriptor, dialect=dialect)

    if auto_guard and descriptor.guard is None:
        token = NamingScheme.guard_token(descriptor.name, descriptor.path)
        descriptor = replace(descriptor, guard=HeaderGuard(token, ""))

    return HeaderGenerator().generate_header(descriptor), descriptor


def resolve_output(
    descriptor: HeaderDescriptor,
    output: Optional[Path],
    output_dir: Optional[Path],
) -> Optional[Path]:
    """Work out where the header goes; None means stdout"""
    if output is not None:
        return output_dir / output if output_dir is not None else output
    if output_dir is not None:
        return output_dir / NamingScheme.include_path(descriptor)
    return None


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Render a C header from a YAML/JSON header descriptor"
    )
    parser.add_argument(
        "descriptor",
        type=Path,
        help="Header descriptor file (YAML or JSON)"
    )
    parser.add_argument(
        "-o", "--output",
        type=Path,
        help="Output header file (default: stdout)"
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        help="Include root; the header is written to <dir>/<path>/<name>"
    )
    parser.add_argument(
        "--dialect",
        choices=[mode.value for mode in DialectMode],
        help="Override the descriptor's dialect (c, cxx, cxx_only)"
    )
    parser.add_argument(
        "--auto-guard",
        action="store_true",
        help="Derive an include guard from the header path when none is given"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Print progress to stderr"
    )

    args = parser.parse_args(argv)
    dialect = DialectMode(args.dialect) if args.dialect else None

    try:
        header, descriptor = render_file(args.descriptor, dialect, args.auto_guard)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except yaml.YAMLError as e:
        print(f"Error: Invalid YAML in {args.descriptor}: {e}", file=sys.stderr)
        return 1
    except DescriptorError as e:
        print(f"Error: Invalid descriptor {args.descriptor}: {e}", file=sys.stderr)
        return 1
    except UnicodeDecodeError as e:
        print(f"Error: {args.descriptor} is not UTF-8 text: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: Cannot read descriptor {args.descriptor}: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Error rendering {args.descriptor}: {e}", file=sys.stderr)
        traceback.print_exc()
        return 1

    try:
        output_file = resolve_output(descriptor, args.output, args.output_dir)
    except ValueError as e:
        print(f"Error: Invalid descriptor {args.descriptor}: {e}", file=sys.stderr)
        return 1

    if args.verbose:
        print(f"Rendering: {args.descriptor} → {output_file or '<stdout>'}", file=sys.stderr)

    if output_file is None:
        sys.stdout.write(header)
        return 0

    try:
        output_file.parent.mkdir(parents=True, exist_ok=True)
        with open(output_file, 'w', encoding='utf-8', newline='\n') as f:
            f.write(header)
    except PermissionError as e:
        print(f"Error: Permission denied when writing to {output_file}: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error writing output file {output_file}: {e}", file=sys.stderr)
        return 1

    print(f"Generated: {output_file}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
