import pytest

from conversion_gen.catalog import Kind
from conversion_gen.config import FrozenConfig
from conversion_gen.core.exceptions import ConfigurationError
from conversion_gen.core.types import (
    ComposedCommand,
    ConversionTask,
    Failure,
    GeneratedFunction,
    InitialCommand,
    PlannedCommand,
    Success,
)
from conversion_gen.pipeline.compositor import compose_chain
from conversion_gen.pipeline.synthesizer import (
    UNIX_ONLY_NOTICE,
    Comment,
    FunctionSynthesizer,
    function_name,
    synthesize_function,
)

pytestmark = pytest.mark.unit


def _synthesize(catalog, source, destination, chain, **kwargs):
    composed = compose_chain(chain, catalog)
    return synthesize_function(source, destination, composed, catalog=catalog, **kwargs)


class TestComment:
    """Paragraph collection and wrapping."""

    def test_collapses_source_whitespace(self):
        comment = Comment()
        comment.add_paragraph("""one
                                 two   three""")
        assert comment.paragraphs == ["one two three"]

    def test_blank_paragraphs_are_dropped(self):
        comment = Comment()
        comment.add_paragraph("   \n  ")
        assert comment.paragraphs == []
        assert comment.format() == ""

    def test_wraps_to_width(self):
        comment = Comment(width=20)
        comment.add_paragraph("alpha beta gamma delta epsilon zeta eta")
        assert all(len(line) <= 20 for line in comment.paragraphs[0].splitlines())
        assert len(comment.paragraphs[0].splitlines()) > 1

    def test_format_separates_paragraphs_with_blank_comment_line(self):
        comment = Comment()
        comment.add_paragraph("First.")
        comment.add_paragraph("Second.")
        assert comment.format() == "// First.\n//\n// Second.\n"


class TestFunctionNames:
    """`<source>_to_<destination>` plus variant suffixes."""

    def test_plain_name(self, catalog):
        composed = compose_chain((Kind.STR, Kind.STRING), catalog)
        assert function_name(Kind.STR, Kind.STRING, composed, catalog) == "str_to_string"

    def test_unix_suffix(self, catalog):
        function = _synthesize(
            catalog, Kind.U8_SLICE, Kind.PATH, (Kind.U8_SLICE, Kind.OS_STR, Kind.PATH)
        )
        assert function.name == "u8_slice_to_path_unix"

    def test_lossy_suffix(self, catalog):
        function = _synthesize(
            catalog, Kind.U8_SLICE, Kind.STRING, (Kind.U8_SLICE, Kind.COW_STR)
        )
        assert function.name == "u8_slice_to_string_lossy"

    def test_name_uses_anchors_not_reference_helpers(self, catalog):
        function = _synthesize(
            catalog, Kind.OS_STRING, Kind.STR, (Kind.OS_STRING_REF, Kind.OPTION_STR)
        )
        assert function.name == "os_string_to_str"
        assert function.input_type == "&OsString"


class TestSynthesizeFunction:
    """Signature, body and doc comment of one function."""

    def test_renders_signature_and_body(self, catalog):
        function = _synthesize(catalog, Kind.STR, Kind.STRING, (Kind.STR, Kind.STRING))
        assert function.render() == (
            "pub fn str_to_string(input: &str) -> String {\n"
            "    input.to_string()\n"
            "}"
        )

    def test_custom_parameter_name(self, catalog):
        composed = compose_chain((Kind.STR, Kind.STRING), catalog, parameter="s")
        function = synthesize_function(
            Kind.STR, Kind.STRING, composed, catalog=catalog, parameter="s"
        )
        assert function.signature == "pub fn str_to_string(s: &str) -> String"
        assert function.body == "s.to_string()"

    def test_unix_only_function_carries_notice(self, catalog):
        function = _synthesize(
            catalog, Kind.U8_SLICE, Kind.PATH, (Kind.U8_SLICE, Kind.OS_STR, Kind.PATH)
        )
        assert function.comment == (UNIX_ONLY_NOTICE,)
        assert function.render().startswith(
            "// This conversion is only allowed on Unix.\npub fn u8_slice_to_path_unix("
        )

    def test_return_notes_follow_the_unix_notice(self, catalog):
        function = _synthesize(
            catalog,
            Kind.OS_STR,
            Kind.C_STR,
            (Kind.OS_STR, Kind.U8_SLICE, Kind.RESULT_C_STR_OR_FROM_BYTES_WITH_NUL_ERROR),
        )
        assert function.name == "os_str_to_c_str_unix"
        assert function.comment[0] == UNIX_ONLY_NOTICE
        assert len(function.comment) == 2
        assert function.comment[1].startswith("A FromBytesWithNulError")

    def test_option_return_carries_not_utf8_note(self, catalog):
        function = _synthesize(
            catalog,
            Kind.OS_STRING,
            Kind.STR,
            (Kind.OS_STRING_REF, Kind.OPTION_STR),
        )
        assert function.comment == ("Returns None if the input is not valid UTF-8.",)

    def test_c_str_note_is_one_wrapped_paragraph(self, catalog):
        function = _synthesize(
            catalog,
            Kind.STR,
            Kind.C_STR,
            (Kind.STR, Kind.U8_SLICE, Kind.RESULT_C_STR_OR_FROM_BYTES_WITH_NUL_ERROR),
        )
        assert function.comment == (
            "A FromBytesWithNulError will be returned if the input is not nul-\n"
            "terminated or contains any interior nul bytes. If your input is not nul-\n"
            "terminated then a conversion without allocation is not possible, convert\n"
            "to a CString instead.",
        )

    def test_lossy_note_is_a_single_wrapped_paragraph(self, catalog):
        function = _synthesize(
            catalog, Kind.U8_SLICE, Kind.STRING, (Kind.U8_SLICE, Kind.COW_STR)
        )
        (paragraph,) = function.comment
        assert "\N{REPLACEMENT CHARACTER}" in paragraph
        assert all(len(line) <= 72 for line in paragraph.splitlines())
        assert function.output_type == "Cow<str>"

    def test_comment_width_is_configurable(self, catalog):
        function = _synthesize(
            catalog,
            Kind.U8_SLICE,
            Kind.STRING,
            (Kind.U8_SLICE, Kind.COW_STR),
            comment_width=40,
        )
        assert all(len(line) <= 40 for line in function.comment[0].splitlines())

    def test_function_name_must_be_identifier(self):
        with pytest.raises(ValueError, match="identifier"):
            GeneratedFunction(
                name="not-an-identifier",
                source=Kind.STR,
                destination=Kind.STRING,
                parameter="input",
                input_type="&str",
                output_type="String",
                body="input.to_string()",
            )


def _composed(catalog, tasks):
    initial = InitialCommand(catalog=catalog, config=FrozenConfig())
    planned = PlannedCommand(initial=initial, tasks=tuple(tasks))
    return ComposedCommand(
        planned=planned,
        conversions=tuple((t, compose_chain(t.chain, catalog)) for t in tasks),
    )


class TestFunctionSynthesizerStage:
    """Stage contract for the synthesizer."""

    def test_one_function_per_task(self, catalog):
        tasks = [
            ConversionTask(
                Kind.U8_SLICE,
                Kind.STRING,
                (Kind.U8_SLICE, Kind.RESULT_STRING_OR_FROM_UTF8_ERROR),
            ),
            ConversionTask(Kind.U8_SLICE, Kind.STRING, (Kind.U8_SLICE, Kind.COW_STR)),
        ]
        result = FunctionSynthesizer().handle(_composed(catalog, tasks))

        assert isinstance(result, Success)
        assert [f.name for f in result.value.functions] == [
            "u8_slice_to_string",
            "u8_slice_to_string_lossy",
        ]
        assert [f.output_type for f in result.value.functions] == [
            "Result<String, FromUtf8Error>",
            "Cow<str>",
        ]

    def test_duplicate_function_names_fail(self, catalog):
        task = ConversionTask(Kind.STR, Kind.STRING, (Kind.STR, Kind.STRING))
        result = FunctionSynthesizer().handle(_composed(catalog, [task, task]))
        assert isinstance(result, Failure)
        assert isinstance(result.error, ConfigurationError)
        assert "str_to_string" in str(result.error)
