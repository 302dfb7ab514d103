"""Representation catalog: the closed set of string/byte/path kinds.

Anchor kinds are valid function inputs and outputs on their own; one or more
conversions are generated between each ordered pair of them. Helper kinds
show up only as temporary types inside a chain or as a final return type.

The by-reference helpers (`&String`, `&Vec<u8>`, ...) are normally implicit;
`String::as_str` takes a `&String`, for example. Since every conversion lives
in its own function, they have to appear explicitly as parameter types.
"""

from __future__ import annotations

import dataclasses
from enum import Enum
from types import MappingProxyType
import typing

from conversion_gen.core.exceptions import ConfigurationError, MissingKindError


class Kind(Enum):
    """Every representation kind the generator knows about."""

    # Anchors
    STR = "str"
    STRING = "string"
    U8_SLICE = "u8_slice"
    U8_VEC = "u8_vec"
    PATH = "path"
    PATH_BUF = "path_buf"
    OS_STR = "os_str"
    OS_STRING = "os_string"
    C_STR = "c_str"
    C_STRING = "c_string"

    # By-reference views of owned anchors
    STRING_REF = "string_ref"
    U8_VEC_REF = "u8_vec_ref"
    OS_STRING_REF = "os_string_ref"
    PATH_BUF_REF = "path_buf_ref"
    C_STRING_REF = "c_string_ref"

    # Wrappers
    COW_STR = "cow_str"
    OPTION_STR = "option_str"
    OPTION_STRING = "option_string"
    RESULT_STR_OR_UTF8_ERROR = "result_str_or_utf8_error"
    RESULT_STRING_OR_UTF8_ERROR = "result_string_or_utf8_error"
    RESULT_STRING_OR_FROM_UTF8_ERROR = "result_string_or_from_utf8_error"
    RESULT_STRING_OR_OS_STRING = "result_string_or_os_string"
    RESULT_C_STR_OR_FROM_BYTES_WITH_NUL_ERROR = (
        "result_c_str_or_from_bytes_with_nul_error"
    )
    RESULT_C_STRING_OR_FROM_BYTES_WITH_NUL_ERROR = (
        "result_c_string_or_from_bytes_with_nul_error"
    )
    RESULT_STRING_OR_INTO_STRING_ERROR = "result_string_or_into_string_error"

    def __repr__(self) -> str:
        return f"Kind.{self.name}"


@dataclasses.dataclass(frozen=True, slots=True)
class KindInfo:
    """Printable type, short identifier, imports and return notes for a kind."""

    type_str: str
    short_name: str | None = None
    imports: tuple[str, ...] = ()
    # Paragraphs added to the doc comment when the kind is a return type
    return_notes: tuple[str, ...] = ()
    lossy: bool = False
    # Anchor this kind is a by-reference view of
    referent: Kind | None = None
    # Anchor carried by an Option or Result (or Cow) wrapper
    wraps: Kind | None = None

    @property
    def is_anchor(self) -> bool:
        return self.short_name is not None


ANCHORS: tuple[Kind, ...] = (
    Kind.STR,
    Kind.STRING,
    Kind.U8_SLICE,
    Kind.U8_VEC,
    Kind.PATH,
    Kind.PATH_BUF,
    Kind.OS_STR,
    Kind.OS_STRING,
    Kind.C_STR,
    Kind.C_STRING,
)

_NOT_UTF8_NOTE = "Returns None if the input is not valid UTF-8."

KIND_INFO: typing.Mapping[Kind, KindInfo] = MappingProxyType(
    {
        Kind.STR: KindInfo("&str", "str"),
        Kind.STRING: KindInfo("String", "string"),
        Kind.U8_SLICE: KindInfo("&[u8]", "u8_slice"),
        Kind.U8_VEC: KindInfo("Vec<u8>", "u8_vec"),
        Kind.PATH: KindInfo("&Path", "path", ("std::path::Path",)),
        Kind.PATH_BUF: KindInfo("PathBuf", "path_buf", ("std::path::PathBuf",)),
        Kind.OS_STR: KindInfo("&OsStr", "os_str", ("std::ffi::OsStr",)),
        Kind.OS_STRING: KindInfo("OsString", "os_string", ("std::ffi::OsString",)),
        Kind.C_STR: KindInfo("&CStr", "c_str", ("std::ffi::CStr",)),
        Kind.C_STRING: KindInfo("CString", "c_string", ("std::ffi::CString",)),
        Kind.STRING_REF: KindInfo("&String", referent=Kind.STRING),
        Kind.U8_VEC_REF: KindInfo("&Vec<u8>", referent=Kind.U8_VEC),
        Kind.OS_STRING_REF: KindInfo("&OsString", referent=Kind.OS_STRING),
        Kind.PATH_BUF_REF: KindInfo("&PathBuf", referent=Kind.PATH_BUF),
        Kind.C_STRING_REF: KindInfo("&CString", referent=Kind.C_STRING),
        Kind.COW_STR: KindInfo(
            "Cow<str>",
            imports=("std::borrow::Cow",),
            return_notes=(
                """This never fails, but invalid UTF-8 sequences will be
                replaced with "\N{REPLACEMENT CHARACTER}". This returns a
                `Cow<str>`; call `to_string()` to convert it to a `String`.""",
            ),
            lossy=True,
            wraps=Kind.STRING,
        ),
        Kind.OPTION_STR: KindInfo(
            "Option<&str>", return_notes=(_NOT_UTF8_NOTE,), wraps=Kind.STR
        ),
        Kind.OPTION_STRING: KindInfo(
            "Option<String>", return_notes=(_NOT_UTF8_NOTE,), wraps=Kind.STRING
        ),
        Kind.RESULT_STR_OR_UTF8_ERROR: KindInfo(
            "Result<&str, Utf8Error>",
            imports=("std::str::Utf8Error",),
            wraps=Kind.STR,
        ),
        Kind.RESULT_STRING_OR_UTF8_ERROR: KindInfo(
            "Result<String, Utf8Error>",
            imports=("std::str::Utf8Error",),
            wraps=Kind.STRING,
        ),
        Kind.RESULT_STRING_OR_FROM_UTF8_ERROR: KindInfo(
            "Result<String, FromUtf8Error>",
            imports=("std::string::FromUtf8Error",),
            wraps=Kind.STRING,
        ),
        Kind.RESULT_STRING_OR_OS_STRING: KindInfo(
            "Result<String, OsString>",
            imports=("std::ffi::OsString",),
            wraps=Kind.STRING,
        ),
        Kind.RESULT_C_STR_OR_FROM_BYTES_WITH_NUL_ERROR: KindInfo(
            "Result<&CStr, FromBytesWithNulError>",
            imports=("std::ffi::CStr", "std::ffi::FromBytesWithNulError"),
            return_notes=(
                """A FromBytesWithNulError will be returned if the input
                is not nul-terminated or contains any interior nul bytes.
                If your input is not nul-terminated then a conversion
                without allocation is not possible, convert to a CString
                instead.""",
            ),
            wraps=Kind.C_STR,
        ),
        Kind.RESULT_C_STRING_OR_FROM_BYTES_WITH_NUL_ERROR: KindInfo(
            "Result<CString, FromBytesWithNulError>",
            imports=("std::ffi::CString", "std::ffi::FromBytesWithNulError"),
            wraps=Kind.C_STRING,
        ),
        Kind.RESULT_STRING_OR_INTO_STRING_ERROR: KindInfo(
            "Result<String, IntoStringError>",
            imports=("std::ffi::IntoStringError",),
            wraps=Kind.STRING,
        ),
    }
)


class KindCatalog:
    """Immutable lookup over the representation kinds.

    Validated once at construction: anchors are exactly the kinds with a
    short identifier, and every anchor has an entry.
    """

    __slots__ = ("_anchors", "_entries")

    def __init__(
        self,
        entries: typing.Mapping[Kind, KindInfo],
        anchors: typing.Iterable[Kind],
    ) -> None:
        self._entries: typing.Mapping[Kind, KindInfo] = MappingProxyType(
            dict(entries)
        )
        self._anchors: tuple[Kind, ...] = tuple(anchors)
        for kind in self._anchors:
            if not self.info(kind).is_anchor:
                raise ConfigurationError(f"anchor {kind!r} has no short name")
        for kind, entry in self._entries.items():
            if entry.is_anchor and kind not in self._anchors:
                raise ConfigurationError(
                    f"helper kind {kind!r} must not carry a short name"
                )

    @property
    def anchors(self) -> tuple[Kind, ...]:
        """Anchor kinds in declared order."""
        return self._anchors

    def __contains__(self, kind: object) -> bool:
        return kind in self._entries

    def info(self, kind: Kind) -> KindInfo:
        """Return the catalog entry for `kind`.

        Raises:
            MissingKindError: If the kind has no entry.
        """
        try:
            return self._entries[kind]
        except KeyError:
            raise MissingKindError(kind) from None

    def type_str(self, kind: Kind) -> str:
        return self.info(kind).type_str

    def html_type_str(self, kind: Kind) -> str:
        """Printable type with angle brackets escaped for HTML."""
        return self.type_str(kind).replace("<", "&lt;").replace(">", "&gt;")

    def short_name(self, kind: Kind) -> str:
        """Return the short identifier of an anchor kind.

        Raises:
            ConfigurationError: If `kind` is a helper kind.
        """
        name = self.info(kind).short_name
        if name is None:
            raise ConfigurationError(f"no short name for {kind!r}")
        return name

    def imports(self, kind: Kind) -> tuple[str, ...]:
        return self.info(kind).imports

    def return_notes(self, kind: Kind) -> tuple[str, ...]:
        return self.info(kind).return_notes

    def is_lossy(self, kind: Kind) -> bool:
        return self.info(kind).lossy

    def can_stand_in_for(self, kind: Kind, anchor: Kind) -> bool:
        """True when `kind` is `anchor` itself or a by-reference view of it."""
        return kind == anchor or self.info(kind).referent == anchor


def default_kinds() -> KindCatalog:
    """Return the built-in representation catalog."""
    return KindCatalog(KIND_INFO, ANCHORS)
