"""Transform table: every registered one-step conversion between two kinds.

Each transform is an expression template with a single `{}` placeholder.
Transforms that need byte-level access to `OsStr`/`OsString` pull in the
Unix extension traits and make the whole chain Unix-only.
"""

from __future__ import annotations

import dataclasses
from types import MappingProxyType
import typing

from conversion_gen.catalog.kinds import Kind
from conversion_gen.core.exceptions import (
    DuplicateTransformError,
    MissingTransformError,
)
from conversion_gen.core.types import _require

PLACEHOLDER = "{}"

OS_STR_EXT = "std::os::unix::ffi::OsStrExt"
OS_STRING_EXT = "std::os::unix::ffi::OsStringExt"


@dataclasses.dataclass(frozen=True, slots=True)
class Transform:
    """A single registered conversion rule."""

    template: str
    os_str_bytes: bool = False
    os_string_bytes: bool = False

    def __post_init__(self) -> None:
        """Ensure the template has exactly one placeholder."""
        _require(
            condition=isinstance(self.template, str),
            message="must be a str",
            field_name="template",
            exc=TypeError,
        )
        _require(
            condition=self.template.count(PLACEHOLDER) == 1,
            message=f"must contain exactly one {PLACEHOLDER!r}, got {self.template!r}",
            field_name="template",
        )

    @property
    def unix_only(self) -> bool:
        return self.os_str_bytes or self.os_string_bytes

    @property
    def imports(self) -> tuple[str, ...]:
        uses: list[str] = []
        if self.os_str_bytes:
            uses.append(OS_STR_EXT)
        if self.os_string_bytes:
            uses.append(OS_STRING_EXT)
        return tuple(uses)

    def apply(self, expr: str) -> str:
        """Substitute `expr` into the template."""
        return self.template.replace(PLACEHOLDER, expr)


def _conv(template: str) -> Transform:
    return Transform(template)


def _os_str_conv(template: str) -> Transform:
    return Transform(template, os_str_bytes=True)


def _os_string_conv(template: str) -> Transform:
    return Transform(template, os_string_bytes=True)


TransformEntry = tuple[Kind, Kind, Transform]


class TransformTable:
    """Immutable lookup of transforms keyed by ordered kind pair.

    At most one transform may be registered per pair.
    """

    __slots__ = ("_table",)

    def __init__(self, entries: typing.Iterable[TransformEntry]) -> None:
        table: dict[tuple[Kind, Kind], Transform] = {}
        for source, destination, transform in entries:
            key = (source, destination)
            if key in table:
                raise DuplicateTransformError(source, destination)
            table[key] = transform
        self._table: typing.Mapping[tuple[Kind, Kind], Transform] = (
            MappingProxyType(table)
        )

    def __len__(self) -> int:
        return len(self._table)

    def __contains__(self, pair: object) -> bool:
        return pair in self._table

    def pairs(self) -> tuple[tuple[Kind, Kind], ...]:
        return tuple(self._table)

    def lookup(self, source: Kind, destination: Kind) -> Transform:
        """Return the transform for `source -> destination`.

        Raises:
            MissingTransformError: If no transform is registered for the pair.
        """
        try:
            return self._table[(source, destination)]
        except KeyError:
            raise MissingTransformError(source, destination) from None


DEFAULT_TRANSFORMS: tuple[TransformEntry, ...] = (
    # From &str
    (Kind.STR, Kind.STRING, _conv("{}.to_string()")),
    (Kind.STR, Kind.U8_SLICE, _conv("{}.as_bytes()")),
    (Kind.STR, Kind.PATH, _conv("Path::new({})")),
    (Kind.STR, Kind.PATH_BUF, _conv("PathBuf::from({})")),
    (Kind.STR, Kind.OS_STR, _conv("OsStr::new({})")),
    (Kind.STR, Kind.OS_STRING, _conv("OsString::from({})")),
    # From String
    (Kind.STRING_REF, Kind.STR, _conv("{}.as_str()")),
    (Kind.STRING_REF, Kind.U8_SLICE, _conv("{}.as_bytes()")),
    (Kind.STRING, Kind.U8_VEC, _conv("{}.into_bytes()")),
    (Kind.STRING_REF, Kind.PATH, _conv("Path::new({})")),
    (Kind.STRING_REF, Kind.PATH_BUF, _conv("PathBuf::from({})")),
    (Kind.STRING_REF, Kind.OS_STR, _conv("OsStr::new({})")),
    (Kind.STRING, Kind.OS_STRING, _conv("OsString::from({})")),
    # From &[u8]
    (Kind.U8_SLICE, Kind.RESULT_STR_OR_UTF8_ERROR, _conv("std::str::from_utf8({})")),
    (
        Kind.U8_SLICE,
        Kind.RESULT_STRING_OR_FROM_UTF8_ERROR,
        _conv("String::from_utf8({}.to_vec())"),
    ),
    (Kind.U8_SLICE, Kind.COW_STR, _conv("String::from_utf8_lossy({})")),
    (Kind.U8_SLICE, Kind.U8_VEC, _conv("{}.to_vec()")),
    (Kind.U8_SLICE, Kind.OS_STR, _os_str_conv("OsStr::from_bytes({})")),
    (
        Kind.U8_SLICE,
        Kind.RESULT_C_STR_OR_FROM_BYTES_WITH_NUL_ERROR,
        _conv("CStr::from_bytes_with_nul({})"),
    ),
    # From Vec<u8>
    (Kind.U8_VEC_REF, Kind.RESULT_STR_OR_UTF8_ERROR, _conv("std::str::from_utf8({})")),
    (Kind.U8_VEC, Kind.RESULT_STRING_OR_FROM_UTF8_ERROR, _conv("String::from_utf8({})")),
    (Kind.U8_VEC_REF, Kind.U8_SLICE, _conv("{}.as_slice()")),
    (Kind.U8_VEC_REF, Kind.OS_STR, _os_str_conv("OsStr::from_bytes({})")),
    (Kind.U8_VEC, Kind.OS_STRING, _os_string_conv("OsString::from_vec({})")),
    (
        Kind.U8_VEC_REF,
        Kind.RESULT_C_STR_OR_FROM_BYTES_WITH_NUL_ERROR,
        _conv("CStr::from_bytes_with_nul({})"),
    ),
    # From &OsStr
    (Kind.OS_STR, Kind.OPTION_STR, _conv("{}.to_str()")),
    (Kind.OS_STR, Kind.OPTION_STRING, _conv("{}.to_str().map(|s| s.to_string())")),
    (Kind.OS_STR, Kind.U8_SLICE, _os_str_conv("{}.as_bytes()")),
    (Kind.OS_STR, Kind.PATH, _conv("Path::new({})")),
    (Kind.OS_STR, Kind.PATH_BUF, _conv("PathBuf::from({})")),
    (Kind.OS_STR, Kind.OS_STRING, _conv("{}.to_os_string()")),
    # From OsString
    (Kind.OS_STRING_REF, Kind.OPTION_STR, _conv("{}.to_str()")),
    (Kind.OS_STRING, Kind.RESULT_STRING_OR_OS_STRING, _conv("{}.into_string()")),
    (Kind.OS_STRING_REF, Kind.U8_SLICE, _os_str_conv("{}.as_bytes()")),
    (Kind.OS_STRING, Kind.U8_VEC, _os_string_conv("{}.into_vec()")),
    (Kind.OS_STRING_REF, Kind.PATH, _conv("Path::new({})")),
    (Kind.OS_STRING, Kind.PATH_BUF, _conv("PathBuf::from({})")),
    (Kind.OS_STRING_REF, Kind.OS_STR, _conv("{}.as_os_str()")),
    # From &Path
    (Kind.PATH, Kind.OPTION_STR, _conv("{}.to_str()")),
    (Kind.PATH, Kind.OPTION_STRING, _conv("{}.to_str().map(|s| s.to_string())")),
    (Kind.PATH, Kind.PATH_BUF, _conv("{}.to_path_buf()")),
    (Kind.PATH, Kind.OS_STR, _conv("{}.as_os_str()")),
    # From PathBuf
    (Kind.PATH_BUF, Kind.PATH, _conv("{}.as_path()")),
    (Kind.PATH_BUF_REF, Kind.PATH, _conv("{}.as_path()")),
    (Kind.PATH_BUF_REF, Kind.OS_STR, _conv("{}.as_os_str()")),
    (Kind.PATH_BUF, Kind.OS_STRING, _conv("{}.into_os_string()")),
    # From &CStr
    (Kind.C_STR, Kind.RESULT_STR_OR_UTF8_ERROR, _conv("{}.to_str()")),
    (Kind.C_STR, Kind.U8_SLICE, _conv("{}.to_bytes()")),
    (Kind.C_STR, Kind.C_STRING, _conv("CString::from({})")),
    # From CString
    (Kind.C_STRING_REF, Kind.C_STR, _conv("{}.as_c_str()")),
    (Kind.C_STRING, Kind.RESULT_STRING_OR_INTO_STRING_ERROR, _conv("{}.into_string()")),
    (Kind.C_STRING_REF, Kind.U8_SLICE, _conv("{}.as_bytes()")),
    (Kind.C_STRING, Kind.U8_VEC, _conv("{}.into_bytes()")),
    # Result/Option wrappers
    (
        Kind.RESULT_STR_OR_UTF8_ERROR,
        Kind.RESULT_STRING_OR_UTF8_ERROR,
        _conv("{}.map(|s| s.to_string())"),
    ),
    (
        Kind.RESULT_C_STR_OR_FROM_BYTES_WITH_NUL_ERROR,
        Kind.RESULT_C_STRING_OR_FROM_BYTES_WITH_NUL_ERROR,
        _conv("{}.map(CString::from)"),
    ),
)


def default_transforms() -> TransformTable:
    """Return the built-in transform table."""
    return TransformTable(DEFAULT_TRANSFORMS)
