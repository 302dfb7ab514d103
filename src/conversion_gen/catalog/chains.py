"""Chain catalog: the curated conversion paths between anchor pairs.

Chains are hand-picked rather than searched for, so the generated code
follows the idiomatic path (for example avoiding a needless allocation)
instead of any merely reachable one. A pair has either one chain or two: a
strict, fallible chain followed by a lossy alternative.
"""

from __future__ import annotations

from types import MappingProxyType
import typing

from conversion_gen.catalog.kinds import Kind
from conversion_gen.core.exceptions import (
    ConfigurationError,
    MissingChainError,
    MissingTransformError,
)

if typing.TYPE_CHECKING:
    from conversion_gen.catalog.kinds import KindCatalog
    from conversion_gen.catalog.transforms import TransformTable

Chain = tuple[Kind, ...]

MAX_ALTERNATIVES = 2


class ChainCatalog:
    """Immutable mapping from ordered anchor pairs to their chains."""

    __slots__ = ("_chains",)

    def __init__(
        self, chains: typing.Mapping[tuple[Kind, Kind], typing.Sequence[Chain]]
    ) -> None:
        frozen: dict[tuple[Kind, Kind], tuple[Chain, ...]] = {}
        for (source, destination), alternatives in chains.items():
            if source == destination:
                raise ConfigurationError(
                    f"chain registered for self pair {source!r} -> {destination!r}"
                )
            alternatives = tuple(tuple(chain) for chain in alternatives)
            if not 1 <= len(alternatives) <= MAX_ALTERNATIVES:
                raise ConfigurationError(
                    f"{source!r} -> {destination!r}: expected 1 to "
                    f"{MAX_ALTERNATIVES} chains, got {len(alternatives)}"
                )
            if any(not chain for chain in alternatives):
                raise ConfigurationError(
                    f"{source!r} -> {destination!r}: chains must not be empty"
                )
            frozen[(source, destination)] = alternatives
        self._chains: typing.Mapping[tuple[Kind, Kind], tuple[Chain, ...]] = (
            MappingProxyType(frozen)
        )

    def __len__(self) -> int:
        return len(self._chains)

    def pairs(self) -> tuple[tuple[Kind, Kind], ...]:
        return tuple(self._chains)

    def chains_for(self, source: Kind, destination: Kind) -> tuple[Chain, ...]:
        """Return the chains registered for `source -> destination`.

        Raises:
            ConfigurationError: If `source` and `destination` are the same.
            MissingChainError: If the pair has no registered chain.
        """
        if source == destination:
            raise ConfigurationError(
                f"no conversion from {source!r} to itself"
            )
        try:
            return self._chains[(source, destination)]
        except KeyError:
            raise MissingChainError(source, destination) from None

    def all_chains(self) -> typing.Iterator[Chain]:
        for alternatives in self._chains.values():
            yield from alternatives

    def validate(self, kinds: KindCatalog, transforms: TransformTable) -> None:
        """Check every chain against the kind catalog and transform table.

        Raises:
            MissingKindError: If a chain mentions a kind with no entry.
            MissingTransformError: On the first step with no transform.
            ConfigurationError: If an alternative chain is not lossy, or a
                chain does not end at the destination or a wrapper of it.
        """
        for (source, destination), alternatives in self._chains.items():
            for chain in alternatives:
                for kind in chain:
                    kinds.info(kind)
                if not kinds.can_stand_in_for(chain[0], source):
                    raise ConfigurationError(
                        f"{source!r} -> {destination!r}: chain starts at "
                        f"{chain[0]!r}, which cannot stand in for {source!r}"
                    )
                if (
                    chain[-1] != destination
                    and kinds.info(chain[-1]).wraps != destination
                ):
                    raise ConfigurationError(
                        f"{source!r} -> {destination!r}: chain ends at "
                        f"{chain[-1]!r}"
                    )
                for step_source, step_destination in zip(chain, chain[1:]):
                    if (step_source, step_destination) not in transforms:
                        raise MissingTransformError(
                            step_source, step_destination, chain
                        )
            for chain in alternatives[1:]:
                if not kinds.is_lossy(chain[-1]):
                    raise ConfigurationError(
                        f"{source!r} -> {destination!r}: alternative chain "
                        f"must end in a lossy kind, got {chain[-1]!r}"
                    )


_CSTR = Kind.RESULT_C_STR_OR_FROM_BYTES_WITH_NUL_ERROR
_CSTRING = Kind.RESULT_C_STRING_OR_FROM_BYTES_WITH_NUL_ERROR

DEFAULT_CHAINS: typing.Mapping[tuple[Kind, Kind], tuple[Chain, ...]] = (
    MappingProxyType(
        {
            # From &str
            (Kind.STR, Kind.STRING): ((Kind.STR, Kind.STRING),),
            (Kind.STR, Kind.U8_SLICE): ((Kind.STR, Kind.U8_SLICE),),
            (Kind.STR, Kind.U8_VEC): ((Kind.STR, Kind.U8_SLICE, Kind.U8_VEC),),
            (Kind.STR, Kind.PATH): ((Kind.STR, Kind.PATH),),
            (Kind.STR, Kind.PATH_BUF): ((Kind.STR, Kind.PATH_BUF),),
            (Kind.STR, Kind.OS_STR): ((Kind.STR, Kind.OS_STR),),
            (Kind.STR, Kind.OS_STRING): ((Kind.STR, Kind.OS_STRING),),
            (Kind.STR, Kind.C_STR): ((Kind.STR, Kind.U8_SLICE, _CSTR),),
            (Kind.STR, Kind.C_STRING): ((Kind.STR, Kind.U8_SLICE, _CSTR, _CSTRING),),
            # From String
            (Kind.STRING, Kind.STR): ((Kind.STRING_REF, Kind.STR),),
            (Kind.STRING, Kind.U8_SLICE): ((Kind.STRING_REF, Kind.U8_SLICE),),
            (Kind.STRING, Kind.U8_VEC): ((Kind.STRING, Kind.U8_VEC),),
            (Kind.STRING, Kind.PATH): ((Kind.STRING_REF, Kind.PATH),),
            (Kind.STRING, Kind.PATH_BUF): ((Kind.STRING_REF, Kind.PATH_BUF),),
            (Kind.STRING, Kind.OS_STR): ((Kind.STRING_REF, Kind.OS_STR),),
            (Kind.STRING, Kind.OS_STRING): ((Kind.STRING, Kind.OS_STRING),),
            (Kind.STRING, Kind.C_STR): ((Kind.STRING_REF, Kind.U8_SLICE, _CSTR),),
            (Kind.STRING, Kind.C_STRING): (
                (Kind.STRING_REF, Kind.U8_SLICE, _CSTR, _CSTRING),
            ),
            # From &[u8]
            (Kind.U8_SLICE, Kind.STR): (
                (Kind.U8_SLICE, Kind.RESULT_STR_OR_UTF8_ERROR),
            ),
            (Kind.U8_SLICE, Kind.STRING): (
                (Kind.U8_SLICE, Kind.RESULT_STRING_OR_FROM_UTF8_ERROR),
                (Kind.U8_SLICE, Kind.COW_STR),
            ),
            (Kind.U8_SLICE, Kind.U8_VEC): ((Kind.U8_SLICE, Kind.U8_VEC),),
            (Kind.U8_SLICE, Kind.PATH): ((Kind.U8_SLICE, Kind.OS_STR, Kind.PATH),),
            (Kind.U8_SLICE, Kind.PATH_BUF): (
                (Kind.U8_SLICE, Kind.OS_STR, Kind.PATH_BUF),
            ),
            (Kind.U8_SLICE, Kind.OS_STR): ((Kind.U8_SLICE, Kind.OS_STR),),
            (Kind.U8_SLICE, Kind.OS_STRING): (
                (Kind.U8_SLICE, Kind.U8_VEC, Kind.OS_STRING),
            ),
            (Kind.U8_SLICE, Kind.C_STR): ((Kind.U8_SLICE, _CSTR),),
            (Kind.U8_SLICE, Kind.C_STRING): ((Kind.U8_SLICE, _CSTR, _CSTRING),),
            # From Vec<u8>
            (Kind.U8_VEC, Kind.STR): (
                (Kind.U8_VEC_REF, Kind.RESULT_STR_OR_UTF8_ERROR),
            ),
            (Kind.U8_VEC, Kind.STRING): (
                (Kind.U8_VEC, Kind.RESULT_STRING_OR_FROM_UTF8_ERROR),
            ),
            (Kind.U8_VEC, Kind.U8_SLICE): ((Kind.U8_VEC_REF, Kind.U8_SLICE),),
            (Kind.U8_VEC, Kind.PATH): ((Kind.U8_VEC_REF, Kind.OS_STR, Kind.PATH),),
            (Kind.U8_VEC, Kind.PATH_BUF): (
                (Kind.U8_VEC, Kind.OS_STRING, Kind.PATH_BUF),
            ),
            (Kind.U8_VEC, Kind.OS_STR): ((Kind.U8_VEC_REF, Kind.OS_STR),),
            (Kind.U8_VEC, Kind.OS_STRING): ((Kind.U8_VEC, Kind.OS_STRING),),
            (Kind.U8_VEC, Kind.C_STR): ((Kind.U8_VEC_REF, _CSTR),),
            (Kind.U8_VEC, Kind.C_STRING): ((Kind.U8_VEC_REF, _CSTR, _CSTRING),),
            # From &Path
            (Kind.PATH, Kind.STR): ((Kind.PATH, Kind.OPTION_STR),),
            (Kind.PATH, Kind.STRING): ((Kind.PATH, Kind.OPTION_STRING),),
            (Kind.PATH, Kind.U8_SLICE): ((Kind.PATH, Kind.OS_STR, Kind.U8_SLICE),),
            (Kind.PATH, Kind.U8_VEC): (
                (Kind.PATH, Kind.OS_STR, Kind.U8_SLICE, Kind.U8_VEC),
            ),
            (Kind.PATH, Kind.PATH_BUF): ((Kind.PATH, Kind.PATH_BUF),),
            (Kind.PATH, Kind.OS_STR): ((Kind.PATH, Kind.OS_STR),),
            (Kind.PATH, Kind.OS_STRING): ((Kind.PATH, Kind.OS_STR, Kind.OS_STRING),),
            (Kind.PATH, Kind.C_STR): (
                (Kind.PATH, Kind.OS_STR, Kind.U8_SLICE, _CSTR),
            ),
            (Kind.PATH, Kind.C_STRING): (
                (Kind.PATH, Kind.OS_STR, Kind.U8_SLICE, _CSTR, _CSTRING),
            ),
            # From PathBuf
            (Kind.PATH_BUF, Kind.STR): (
                (Kind.PATH_BUF_REF, Kind.PATH, Kind.OPTION_STR),
            ),
            (Kind.PATH_BUF, Kind.STRING): (
                (Kind.PATH_BUF, Kind.PATH, Kind.OPTION_STRING),
            ),
            (Kind.PATH_BUF, Kind.U8_SLICE): (
                (Kind.PATH_BUF_REF, Kind.OS_STR, Kind.U8_SLICE),
            ),
            (Kind.PATH_BUF, Kind.U8_VEC): (
                (Kind.PATH_BUF, Kind.OS_STRING, Kind.U8_VEC),
            ),
            (Kind.PATH_BUF, Kind.PATH): ((Kind.PATH_BUF_REF, Kind.PATH),),
            (Kind.PATH_BUF, Kind.OS_STR): ((Kind.PATH_BUF_REF, Kind.OS_STR),),
            (Kind.PATH_BUF, Kind.OS_STRING): ((Kind.PATH_BUF, Kind.OS_STRING),),
            (Kind.PATH_BUF, Kind.C_STR): (
                (Kind.PATH_BUF_REF, Kind.OS_STR, Kind.U8_SLICE, _CSTR),
            ),
            (Kind.PATH_BUF, Kind.C_STRING): (
                (Kind.PATH_BUF_REF, Kind.OS_STR, Kind.U8_SLICE, _CSTR, _CSTRING),
            ),
            # From &OsStr
            (Kind.OS_STR, Kind.STR): ((Kind.OS_STR, Kind.OPTION_STR),),
            (Kind.OS_STR, Kind.STRING): ((Kind.OS_STR, Kind.OPTION_STRING),),
            (Kind.OS_STR, Kind.U8_SLICE): ((Kind.OS_STR, Kind.U8_SLICE),),
            (Kind.OS_STR, Kind.U8_VEC): (
                (Kind.OS_STR, Kind.U8_SLICE, Kind.U8_VEC),
            ),
            (Kind.OS_STR, Kind.PATH): ((Kind.OS_STR, Kind.PATH),),
            (Kind.OS_STR, Kind.PATH_BUF): ((Kind.OS_STR, Kind.PATH_BUF),),
            (Kind.OS_STR, Kind.OS_STRING): ((Kind.OS_STR, Kind.OS_STRING),),
            (Kind.OS_STR, Kind.C_STR): ((Kind.OS_STR, Kind.U8_SLICE, _CSTR),),
            (Kind.OS_STR, Kind.C_STRING): (
                (Kind.OS_STR, Kind.U8_SLICE, _CSTR, _CSTRING),
            ),
            # From OsString
            (Kind.OS_STRING, Kind.STR): ((Kind.OS_STRING_REF, Kind.OPTION_STR),),
            (Kind.OS_STRING, Kind.STRING): (
                (Kind.OS_STRING, Kind.RESULT_STRING_OR_OS_STRING),
            ),
            (Kind.OS_STRING, Kind.U8_SLICE): (
                (Kind.OS_STRING_REF, Kind.U8_SLICE),
            ),
            (Kind.OS_STRING, Kind.U8_VEC): ((Kind.OS_STRING, Kind.U8_VEC),),
            (Kind.OS_STRING, Kind.PATH): ((Kind.OS_STRING_REF, Kind.PATH),),
            (Kind.OS_STRING, Kind.PATH_BUF): ((Kind.OS_STRING, Kind.PATH_BUF),),
            (Kind.OS_STRING, Kind.OS_STR): ((Kind.OS_STRING_REF, Kind.OS_STR),),
            (Kind.OS_STRING, Kind.C_STR): (
                (Kind.OS_STRING_REF, Kind.U8_SLICE, _CSTR),
            ),
            (Kind.OS_STRING, Kind.C_STRING): (
                (Kind.OS_STRING_REF, Kind.U8_SLICE, _CSTR, _CSTRING),
            ),
            # From &CStr
            (Kind.C_STR, Kind.STR): ((Kind.C_STR, Kind.RESULT_STR_OR_UTF8_ERROR),),
            (Kind.C_STR, Kind.STRING): (
                (
                    Kind.C_STR,
                    Kind.RESULT_STR_OR_UTF8_ERROR,
                    Kind.RESULT_STRING_OR_UTF8_ERROR,
                ),
            ),
            (Kind.C_STR, Kind.U8_SLICE): ((Kind.C_STR, Kind.U8_SLICE),),
            (Kind.C_STR, Kind.U8_VEC): ((Kind.C_STR, Kind.U8_SLICE, Kind.U8_VEC),),
            (Kind.C_STR, Kind.PATH): (
                (Kind.C_STR, Kind.U8_SLICE, Kind.OS_STR, Kind.PATH),
            ),
            (Kind.C_STR, Kind.PATH_BUF): (
                (Kind.C_STR, Kind.U8_SLICE, Kind.OS_STR, Kind.PATH, Kind.PATH_BUF),
            ),
            (Kind.C_STR, Kind.OS_STR): ((Kind.C_STR, Kind.U8_SLICE, Kind.OS_STR),),
            (Kind.C_STR, Kind.OS_STRING): (
                (Kind.C_STR, Kind.U8_SLICE, Kind.OS_STR, Kind.OS_STRING),
            ),
            (Kind.C_STR, Kind.C_STRING): ((Kind.C_STR, Kind.C_STRING),),
            # From CString
            (Kind.C_STRING, Kind.STR): (
                (Kind.C_STRING_REF, Kind.C_STR, Kind.RESULT_STR_OR_UTF8_ERROR),
            ),
            (Kind.C_STRING, Kind.STRING): (
                (Kind.C_STRING, Kind.RESULT_STRING_OR_INTO_STRING_ERROR),
            ),
            (Kind.C_STRING, Kind.U8_SLICE): ((Kind.C_STRING_REF, Kind.U8_SLICE),),
            (Kind.C_STRING, Kind.U8_VEC): ((Kind.C_STRING, Kind.U8_VEC),),
            (Kind.C_STRING, Kind.PATH): (
                (Kind.C_STRING_REF, Kind.U8_SLICE, Kind.OS_STR, Kind.PATH),
            ),
            (Kind.C_STRING, Kind.PATH_BUF): (
                (Kind.C_STRING, Kind.U8_VEC, Kind.OS_STRING, Kind.PATH_BUF),
            ),
            (Kind.C_STRING, Kind.OS_STR): (
                (Kind.C_STRING_REF, Kind.U8_SLICE, Kind.OS_STR),
            ),
            (Kind.C_STRING, Kind.OS_STRING): (
                (Kind.C_STRING, Kind.U8_VEC, Kind.OS_STRING),
            ),
            (Kind.C_STRING, Kind.C_STR): ((Kind.C_STRING_REF, Kind.C_STR),),
        }
    )
)


def default_chains() -> ChainCatalog:
    """Return the built-in chain catalog."""
    return ChainCatalog(DEFAULT_CHAINS)
