"""Tests for configuration resolution, precedence and provenance."""

import dataclasses
from pathlib import Path

import pytest

from conversion_gen.config import (
    ConfigFileError,
    FrozenConfig,
    list_available_profiles,
    resolve_config,
)
from conversion_gen.config.env_loader import EnvironmentConfigLoader
from conversion_gen.config.file_loader import FileConfigLoader

pytestmark = pytest.mark.unit

PYPROJECT = """\
[project]
name = "demo"

[tool.conversion_gen]
comment_width = 80
out_dir = "build/src"
unknown_option = true

[tool.conversion_gen.profiles.docs]
run_toolchain = false
docs_path = "site/index.html"

[tool.conversion_gen.profiles.wide]
comment_width = 100
"""


@pytest.fixture
def project(tmp_path):
    (tmp_path / "pyproject.toml").write_text(PYPROJECT, encoding="utf-8")
    return tmp_path


class TestDefaults:
    """Resolution with no configuration sources present."""

    def test_defaults_match_frozen_defaults(self, isolated_project):
        resolved = resolve_config(project_root=isolated_project)
        assert resolved.to_frozen() == FrozenConfig()
        assert set(resolved.origin.values()) == {"default"}

    def test_frozen_config_is_immutable(self):
        frozen = FrozenConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            frozen.comment_width = 10  # type: ignore[misc]


class TestPrecedence:
    """Programmatic > Environment > pyproject.toml > Defaults."""

    def test_file_overrides_defaults(self, project):
        resolved = resolve_config(project_root=project)
        assert resolved.comment_width == 80
        assert resolved.out_dir == Path("build/src")
        assert resolved.origin["comment_width"] == "file"
        assert resolved.origin["parameter_name"] == "default"

    def test_env_overrides_file(self, project, monkeypatch):
        monkeypatch.setenv("CONVERSION_GEN_COMMENT_WIDTH", "90")
        resolved = resolve_config(project_root=project)
        assert resolved.comment_width == 90
        assert resolved.origin["comment_width"] == "env"

    def test_programmatic_overrides_env(self, project, monkeypatch):
        monkeypatch.setenv("CONVERSION_GEN_COMMENT_WIDTH", "90")
        resolved = resolve_config({"comment_width": 60}, project_root=project)
        assert resolved.comment_width == 60
        assert resolved.origin["comment_width"] == "programmatic"

    def test_unknown_fields_are_ignored(self, project):
        resolved = resolve_config({"not_a_field": 1}, project_root=project)
        assert "not_a_field" not in resolved.origin
        assert "unknown_option" not in resolved._asdict()


class TestProfiles:
    """Named profiles layered over the base section."""

    def test_profile_layers_over_base_section(self, project):
        resolved = resolve_config(profile="docs", project_root=project)
        assert resolved.run_toolchain is False
        assert resolved.docs_path == Path("site/index.html")
        assert resolved.comment_width == 80

    def test_profile_from_environment(self, project, monkeypatch):
        monkeypatch.setenv("CONVERSION_GEN_PROFILE", "wide")
        assert resolve_config(project_root=project).comment_width == 100

    def test_unknown_profile_raises(self, project):
        with pytest.raises(ConfigFileError, match="Profile 'missing' not found"):
            resolve_config(profile="missing", project_root=project)

    def test_list_profiles(self, project):
        assert sorted(list_available_profiles(project)) == ["docs", "wide"]

    def test_list_profiles_without_pyproject(self, isolated_project):
        assert list_available_profiles(isolated_project) == []


class TestValidation:
    """Invalid values are rejected during resolution."""

    def test_invalid_parameter_name(self, isolated_project):
        with pytest.raises(ValueError, match="Invalid parameter name"):
            resolve_config({"parameter_name": "2fast"}, project_root=isolated_project)

    @pytest.mark.parametrize("name", ["fn", "type", "yield", "_"])
    def test_rust_keyword_parameter_name(self, isolated_project, name):
        with pytest.raises(ValueError, match="Rust keyword"):
            resolve_config({"parameter_name": name}, project_root=isolated_project)

    def test_comment_width_bounds(self, isolated_project):
        with pytest.raises(ValueError):
            resolve_config({"comment_width": 5}, project_root=isolated_project)

    def test_invalid_environment_value(self, isolated_project, monkeypatch):
        monkeypatch.setenv("CONVERSION_GEN_COMMENT_WIDTH", "wide")
        with pytest.raises(ValueError, match="Invalid environment configuration"):
            resolve_config(project_root=isolated_project)

    def test_background_is_normalized(self, isolated_project):
        resolved = resolve_config(
            {"highlight_background": "#ABCDEF"}, project_root=isolated_project
        )
        assert resolved.highlight_background == "#abcdef"

    def test_invalid_background(self, isolated_project):
        with pytest.raises(ValueError):
            resolve_config(
                {"highlight_background": "blue"}, project_root=isolated_project
            )

    def test_toolchain_commands_from_environment(self, isolated_project, monkeypatch):
        monkeypatch.setenv("CONVERSION_GEN_TOOLCHAIN_COMMANDS", "fmt, build")
        resolved = resolve_config(project_root=isolated_project)
        assert resolved.toolchain_commands == ("fmt", "build")

    def test_malformed_pyproject(self, tmp_path):
        (tmp_path / "pyproject.toml").write_text("[tool.conversion_gen\n")
        with pytest.raises(ConfigFileError, match="Failed to parse TOML"):
            resolve_config(project_root=tmp_path)


class TestResolvedConfigHelpers:
    """Provenance helpers on the resolved configuration."""

    def test_with_overrides_marks_programmatic(self, isolated_project):
        resolved = resolve_config(project_root=isolated_project)
        updated = resolved.with_overrides(run_toolchain=False, bogus=1)
        assert updated.run_toolchain is False
        assert updated.origin["run_toolchain"] == "programmatic"
        assert resolved.run_toolchain is True

    def test_audit_lists_every_field(self, project):
        audit = resolve_config(project_root=project).audit()
        assert "comment_width: file:80" in audit
        assert "parameter_name: default:input" in audit
        assert "origin" not in audit


class TestLoaders:
    """The individual configuration sources."""

    def test_env_var_names_follow_prefix(self):
        names = EnvironmentConfigLoader().env_var_names()
        assert names["CONVERSION_GEN_OUT_DIR"] == "out_dir"

    def test_env_summary_only_lists_prefixed_variables(self, monkeypatch):
        monkeypatch.setenv("CONVERSION_GEN_CARGO", "cargo-nightly")
        monkeypatch.setenv("UNRELATED_VARIABLE", "x")
        summary = EnvironmentConfigLoader().get_env_summary()
        assert summary == {"CONVERSION_GEN_CARGO": "cargo-nightly"}

    def test_pyproject_found_in_parent_directory(self, project):
        nested = project / "a" / "b"
        nested.mkdir(parents=True)
        found = FileConfigLoader().find_pyproject_toml(nested)
        assert found == (project / "pyproject.toml").resolve()
