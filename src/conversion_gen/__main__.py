"""CLI entry point.

Usage:
    python -m conversion_gen
    python -m conversion_gen --skip-toolchain --docs site/index.html
    python -m conversion_gen --print
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys
from typing import TYPE_CHECKING, Any

from conversion_gen.config import ConfigFileError, resolve_config
from conversion_gen.core.exceptions import ConversionGenError
from conversion_gen.executor import GenerationExecutor
from conversion_gen.frontdoor import build

if TYPE_CHECKING:
    from collections.abc import Sequence

# ruff: noqa: T201

log = logging.getLogger("conversion_gen")


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate Rust string conversion functions and their docs",
        prog="python -m conversion_gen",
    )
    parser.add_argument("--out-dir", type=Path, help="Directory for generated .rs files")
    parser.add_argument("--docs", type=Path, help="Path of the documentation page")
    parser.add_argument("--crate-dir", type=Path, help="Cargo crate directory")
    parser.add_argument(
        "--skip-toolchain",
        action="store_true",
        help="Don't run cargo fmt/clippy/build on the generated crate",
    )
    parser.add_argument("--profile", help="Configuration profile to use")
    parser.add_argument(
        "--print",
        dest="print_only",
        action="store_true",
        help="Print the generated modules to stdout and write nothing",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the generator; returns the process exit status."""
    args = _parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    overrides: dict[str, Any] = {}
    if args.out_dir is not None:
        overrides["out_dir"] = args.out_dir
    if args.docs is not None:
        overrides["docs_path"] = args.docs
    if args.crate_dir is not None:
        overrides["crate_dir"] = args.crate_dir
    if args.skip_toolchain:
        overrides["run_toolchain"] = False

    try:
        config = resolve_config(overrides, profile=args.profile).to_frozen()
        if args.print_only:
            result = GenerationExecutor(config).execute()
            for module in (*result.modules, result.lib):
                print(f"// {module.filename}")
                print(module.source)
            return 0
        build(config)
    except (ConversionGenError, ConfigFileError, ValueError) as e:
        log.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
