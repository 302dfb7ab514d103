import pytest

from conversion_gen.pipeline.imports import ImportAggregator, combine_imports

pytestmark = pytest.mark.unit


class TestCombineImports:
    """Deduplication and grouping of `use` paths."""

    def test_sibling_pair_is_grouped(self):
        assert combine_imports(["std::path::PathBuf", "std::path::Path"]) == (
            "std::path::{Path, PathBuf}",
        )

    def test_lone_sibling_stays_as_is(self):
        assert combine_imports(["std::ffi::OsStr"]) == ("std::ffi::OsStr",)

    def test_unrelated_imports_in_same_namespace_are_not_grouped(self):
        assert combine_imports(
            ["std::ffi::CStr", "std::ffi::FromBytesWithNulError"]
        ) == ("std::ffi::CStr", "std::ffi::FromBytesWithNulError")

    def test_output_is_sorted_and_deduplicated(self):
        paths = [
            "std::str::Utf8Error",
            "std::borrow::Cow",
            "std::str::Utf8Error",
            "std::ffi::CString",
            "std::ffi::CStr",
        ]
        assert combine_imports(paths) == (
            "std::borrow::Cow",
            "std::ffi::{CStr, CString}",
            "std::str::Utf8Error",
        )

    def test_extension_traits_are_grouped(self):
        assert combine_imports(
            ["std::os::unix::ffi::OsStringExt", "std::os::unix::ffi::OsStrExt"]
        ) == ("std::os::unix::ffi::{OsStrExt, OsStringExt}",)

    def test_custom_combos(self):
        combos = [("crate::a", "X", "Y")]
        assert combine_imports(["crate::a::Y", "crate::a::X"], combos) == (
            "crate::a::{X, Y}",
        )

    def test_input_order_does_not_matter(self):
        paths = ["std::path::Path", "std::ffi::OsStr", "std::ffi::OsString"]
        assert combine_imports(paths) == combine_imports(reversed(paths))


class TestImportAggregator:
    """Running import set for one module."""

    def test_render_emits_use_lines(self):
        aggregator = ImportAggregator()
        aggregator.add(["std::path::Path"])
        aggregator.add(["std::path::PathBuf", "std::borrow::Cow"])
        assert aggregator.render() == (
            "use std::borrow::Cow;\nuse std::path::{Path, PathBuf};"
        )

    def test_raw_keeps_ungrouped_paths(self):
        aggregator = ImportAggregator()
        aggregator.add(["std::path::Path", "std::path::PathBuf"])
        assert aggregator.raw == {"std::path::Path", "std::path::PathBuf"}

    def test_empty_aggregator_renders_nothing(self):
        assert ImportAggregator().render() == ""
        assert ImportAggregator().combined() == ()
