"""Scenario-first helpers for a complete generate-build-document run.

Generation happens entirely in memory first; files are only written once
every anchor pair has produced its functions, and the documentation page is
only rendered once cargo has accepted the generated crate.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from conversion_gen.catalog import default_catalog
from conversion_gen.config import FrozenConfig, resolve_config
from conversion_gen.executor import GenerationExecutor
from conversion_gen.render import Highlighter, render_page
from conversion_gen.toolchain import CargoToolchain

if TYPE_CHECKING:
    from conversion_gen.catalog import Catalog, Kind
    from conversion_gen.core.types import GenerationResult

log = logging.getLogger(__name__)


def write_sources(
    result: GenerationResult, out_dir: str | Path
) -> list[tuple[Kind, Path]]:
    """Write every generated module plus `lib.rs` into `out_dir`.

    Returns:
        `(anchor, path)` pairs in anchor order.
    """
    out = Path(out_dir)
    out.mkdir(parents=True, exist_ok=True)
    written: list[tuple[Kind, Path]] = []
    for module in result.modules:
        path = out / module.filename
        path.write_text(module.source, encoding="utf-8")
        if module.anchor is not None:
            written.append((module.anchor, path))
    (out / result.lib.filename).write_text(result.lib.source, encoding="utf-8")
    log.info("Wrote %d modules to %s", len(written), out)
    return written


def build(
    config: FrozenConfig | None = None,
    catalog: Catalog | None = None,
    *,
    toolchain: CargoToolchain | None = None,
) -> Path:
    """Generate, write, build and document the conversion crate.

    Args:
        config: Frozen configuration. If omitted, `resolve_config()` is used.
        catalog: Catalog to generate from; defaults to the built-in one.
        toolchain: Cargo runner override (tests).

    Returns:
        Path of the written documentation page.

    Raises:
        ConversionGenError: On any configuration or collaborator failure.
    """
    cfg = config or resolve_config().to_frozen()
    cat = catalog or default_catalog()

    result = GenerationExecutor(cfg, cat).execute()
    written = write_sources(result, cfg.out_dir)

    if cfg.run_toolchain:
        runner = toolchain or CargoToolchain(cfg.crate_dir, cargo=cfg.cargo)
        runner.run_all(cfg.toolchain_commands)

    # Read back so the page shows the formatted sources
    sources = [(anchor, path.read_text(encoding="utf-8")) for anchor, path in written]
    highlighter = Highlighter(
        style=cfg.highlight_style, background=cfg.highlight_background
    )
    page = render_page(sources, cat, highlighter)

    docs_path = Path(cfg.docs_path)
    docs_path.parent.mkdir(parents=True, exist_ok=True)
    docs_path.write_text(page, encoding="utf-8")
    log.info("Wrote documentation to %s", docs_path)
    return docs_path
