"""Static conversion catalogs: representation kinds, transforms and chains.

The three catalogs are immutable, built once, and passed explicitly into the
pipeline stages as a single `Catalog` bundle.
"""

from __future__ import annotations

import dataclasses
from functools import lru_cache

from .chains import Chain, ChainCatalog, default_chains
from .kinds import Kind, KindCatalog, KindInfo, default_kinds
from .transforms import Transform, TransformTable, default_transforms


@dataclasses.dataclass(frozen=True, slots=True)
class Catalog:
    """Kinds, transforms and chains for one generation pass."""

    kinds: KindCatalog
    transforms: TransformTable
    chains: ChainCatalog

    @property
    def anchors(self) -> tuple[Kind, ...]:
        return self.kinds.anchors

    def validate(self) -> None:
        """Check that every chain resolves step by step.

        Raises:
            ConfigurationError: On the first inconsistency found.
        """
        self.chains.validate(self.kinds, self.transforms)


@lru_cache(maxsize=1)
def default_catalog() -> Catalog:
    """Return the built-in catalog, constructed once per process."""
    return Catalog(
        kinds=default_kinds(),
        transforms=default_transforms(),
        chains=default_chains(),
    )


__all__ = [
    "Catalog",
    "Chain",
    "ChainCatalog",
    "Kind",
    "KindCatalog",
    "KindInfo",
    "Transform",
    "TransformTable",
    "default_catalog",
]
