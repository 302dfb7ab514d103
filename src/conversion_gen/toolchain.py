"""Cargo invocation for the generated crate.

Formatting, linting and building are delegated to cargo. Any failure aborts
the pass; the steps are deterministic, so there is nothing to retry.
"""

from __future__ import annotations

import logging
from pathlib import Path
import subprocess
from typing import TYPE_CHECKING

from conversion_gen.core.exceptions import ToolchainError

if TYPE_CHECKING:
    from collections.abc import Iterable

log = logging.getLogger(__name__)

DEFAULT_OPERATIONS: tuple[str, ...] = ("fmt", "clippy", "build")


class CargoToolchain:
    """Runs `cargo <operation>` inside a crate directory."""

    def __init__(self, crate_dir: str | Path, cargo: str = "cargo") -> None:
        self.crate_dir = Path(crate_dir)
        self.cargo = cargo

    def run(self, operation: str) -> None:
        """Run one cargo subcommand.

        Raises:
            ToolchainError: If cargo cannot be started or exits non-zero.
        """
        cmd = [self.cargo, operation]
        log.info("Running %s in %s", " ".join(cmd), self.crate_dir)
        try:
            subprocess.run(cmd, cwd=self.crate_dir, check=True)
        except FileNotFoundError as e:
            raise ToolchainError(
                operation, f"{self.cargo!r} not found ({e})"
            ) from e
        except subprocess.CalledProcessError as e:
            raise ToolchainError(
                operation,
                f"exited with status {e.returncode}",
                returncode=e.returncode,
            ) from e

    def run_all(self, operations: Iterable[str] = DEFAULT_OPERATIONS) -> None:
        """Run each operation in order, stopping at the first failure."""
        for operation in operations:
            self.run(operation)
