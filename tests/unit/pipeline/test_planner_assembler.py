import pytest

from conversion_gen.catalog import Catalog, Kind
from conversion_gen.catalog.chains import DEFAULT_CHAINS, ChainCatalog
from conversion_gen.config import FrozenConfig
from conversion_gen.core.exceptions import ConfigurationError, MissingChainError
from conversion_gen.core.types import (
    Failure,
    GenerationResult,
    InitialCommand,
    Success,
)
from conversion_gen.pipeline.assembler import (
    LIB_HEADER,
    ModuleAssembler,
    build_lib,
    build_module,
    module_name,
)
from conversion_gen.pipeline.compositor import ChainCompositor
from conversion_gen.pipeline.planner import ChainPlanner
from conversion_gen.pipeline.synthesizer import FunctionSynthesizer

pytestmark = pytest.mark.unit


def _initial(catalog):
    return InitialCommand(catalog=catalog, config=FrozenConfig())


def _synthesized(catalog):
    planned = ChainPlanner().handle(_initial(catalog))
    composed = ChainCompositor().handle(planned.value)
    return FunctionSynthesizer().handle(composed.value).value


class TestChainPlanner:
    """Expansion of the anchor set into conversion tasks."""

    def test_plans_every_pair_and_alternative(self, catalog):
        result = ChainPlanner().handle(_initial(catalog))
        assert isinstance(result, Success)
        # 90 ordered pairs, one of which has a lossy alternative
        assert len(result.value.tasks) == 91

    def test_tasks_follow_anchor_order(self, catalog):
        tasks = ChainPlanner().handle(_initial(catalog)).value.tasks
        assert (tasks[0].source, tasks[0].destination) == (Kind.STR, Kind.STRING)
        assert (tasks[-1].source, tasks[-1].destination) == (Kind.C_STRING, Kind.C_STR)
        sources = [task.source for task in tasks]
        assert sources == sorted(sources, key=catalog.anchors.index)

    def test_no_self_pairs(self, catalog):
        tasks = ChainPlanner().handle(_initial(catalog)).value.tasks
        assert all(task.source != task.destination for task in tasks)

    def test_missing_pair_is_a_failure(self, catalog):
        chains = {k: v for k, v in DEFAULT_CHAINS.items() if k != (Kind.PATH, Kind.STR)}
        broken = Catalog(
            kinds=catalog.kinds,
            transforms=catalog.transforms,
            chains=ChainCatalog(chains),
        )
        result = ChainPlanner().handle(_initial(broken))
        assert isinstance(result, Failure)
        assert isinstance(result.error, MissingChainError)
        assert result.error.source is Kind.PATH
        assert result.error.destination is Kind.STR


class TestModuleAssembler:
    """Grouping functions into modules plus the crate root."""

    def test_one_module_per_anchor(self, catalog):
        result = ModuleAssembler().handle(_synthesized(catalog))
        assert isinstance(result, Success)
        assert isinstance(result.value, GenerationResult)
        assert [m.anchor for m in result.value.modules] == list(catalog.anchors)
        assert [m.filename for m in result.value.modules][:2] == [
            "from_str.rs",
            "from_string.rs",
        ]

    def test_module_functions_share_its_source(self, catalog):
        result = ModuleAssembler().handle(_synthesized(catalog)).value
        for module in result.modules:
            assert all(f.source == module.anchor for f in module.functions)

    def test_lib_declares_every_module_in_order(self, catalog):
        lib = ModuleAssembler().handle(_synthesized(catalog)).value.lib
        assert lib.filename == "lib.rs"
        assert lib.source.startswith(LIB_HEADER)
        assert lib.source.endswith(
            "pub mod from_str;\npub mod from_string;\npub mod from_u8_slice;\n"
            "pub mod from_u8_vec;\npub mod from_path;\npub mod from_path_buf;\n"
            "pub mod from_os_str;\npub mod from_os_string;\npub mod from_c_str;\n"
            "pub mod from_c_string;\n"
        )

    def test_lib_allows_reference_parameters(self):
        assert "#![allow(clippy::ptr_arg)]" in build_lib([]).source

    def test_anchor_without_functions_is_a_failure(self, catalog):
        synthesized = _synthesized(catalog)
        trimmed = type(synthesized)(
            composed=synthesized.composed,
            functions=tuple(f for f in synthesized.functions if f.source != Kind.PATH),
        )
        result = ModuleAssembler().handle(trimmed)
        assert isinstance(result, Failure)
        assert isinstance(result.error, ConfigurationError)

    def test_module_without_imports_starts_with_a_function(self, catalog):
        functions = [
            f
            for f in _synthesized(catalog).functions
            if (f.source, f.destination) == (Kind.STR, Kind.STRING)
        ]
        module = build_module(Kind.STR, functions, catalog)
        assert module.source == (
            "pub fn str_to_string(input: &str) -> String {\n"
            "    input.to_string()\n"
            "}\n"
        )
        assert module.imports == ()

    def test_module_name(self, catalog):
        assert module_name(Kind.PATH_BUF, catalog) == "from_path_buf"
