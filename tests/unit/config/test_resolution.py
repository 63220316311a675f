"""Unit tests for configuration resolution across sources."""

import logging
import os
from unittest.mock import patch

import pytest

from fix_augment.chunking import ChunkMode
from fix_augment.config import (
    ConfigFileError,
    FixAugmentSettings,
    FrozenConfig,
    check_environment,
    config_override,
    config_scope,
    get_effective_profile,
    list_available_profiles,
    resolve_config,
    validate_profile,
)
from fix_augment.config.env_loader import env_var_names
from fix_augment.config.types import to_field_name
from fix_augment.exceptions import ConfigurationError


class TestDefaults:
    @pytest.mark.unit
    def test_defaults_without_any_source(self):
        config = resolve_config()

        assert config.max_safe_input_size == 8000
        assert config.min_chunk_size == 1000
        assert config.max_chunk_size == 10000
        assert config.context_overlap_size == 200
        assert config.chunk_mode is ChunkMode.SMART
        assert config.output_format == "enhanced"
        assert set(config.origin.values()) == {"default"}

    @pytest.mark.unit
    def test_default_values_skip_the_environment(self, monkeypatch):
        monkeypatch.setenv("FIX_AUGMENT_MAX_CHUNK_SIZE", "oops")

        assert FixAugmentSettings.default_values()["max_chunk_size"] == 10000


class TestSources:
    @pytest.mark.unit
    def test_environment_values_are_coerced(self, isolated_config_sources):
        with isolated_config_sources(
            env_vars={"MAX_CHUNK_SIZE": "6000", "ENABLED": "false"}
        ):
            config = resolve_config()

        assert config.max_chunk_size == 6000
        assert config.enabled is False
        assert config.origin["max_chunk_size"] == "env"
        assert "max_chunk_size: env:FIX_AUGMENT_MAX_CHUNK_SIZE=6000" in config.audit()

    @pytest.mark.unit
    def test_project_file_accepts_camel_case(self, isolated_config_sources):
        pyproject = """
[tool.fix_augment]
maxChunkSize = 7000
chunk_mode = "preserve_code"
"""
        with isolated_config_sources(pyproject_content=pyproject):
            config = resolve_config()

        assert config.max_chunk_size == 7000
        assert config.chunk_mode is ChunkMode.PRESERVE_CODE
        assert config.origin["max_chunk_size"] == "file"

    @pytest.mark.unit
    def test_home_profile(self, isolated_config_sources):
        home = """
min_chunk_size = 500

[profiles.strict]
max_safe_input_size = 4000
"""
        with isolated_config_sources(home_content=home):
            default = resolve_config()
            strict = resolve_config(profile="strict")

        assert default.min_chunk_size == 500
        assert strict.max_safe_input_size == 4000
        assert strict.min_chunk_size == 1000

    @pytest.mark.unit
    def test_profile_from_environment(self, isolated_config_sources):
        home = "[profiles.fast]\nchunk_mode = \"naive\"\n"
        with isolated_config_sources(home_content=home, env_vars={"PROFILE": "fast"}):
            assert get_effective_profile() == "fast"
            assert resolve_config().chunk_mode is ChunkMode.NAIVE

    @pytest.mark.unit
    def test_precedence(self, isolated_config_sources):
        with isolated_config_sources(
            home_content="complexity_threshold = 1\n",
            pyproject_content="[tool.fix_augment]\ncomplexity_threshold = 2\n",
            env_vars={"COMPLEXITY_THRESHOLD": "3"},
        ):
            assert resolve_config({"complexity_threshold": 4}).complexity_threshold == 4
            assert resolve_config().complexity_threshold == 3

        with isolated_config_sources(
            home_content="complexity_threshold = 1\n",
            pyproject_content="[tool.fix_augment]\ncomplexity_threshold = 2\n",
        ):
            assert resolve_config().complexity_threshold == 2

    @pytest.mark.unit
    def test_unknown_keys_are_ignored(self, isolated_config_sources):
        with isolated_config_sources(pyproject_content="[tool.fix_augment]\ncolour = 'red'\n"):
            config = resolve_config({"also_unknown": 1})

        assert "colour" not in config.origin
        assert "also_unknown" not in config.origin

    @pytest.mark.unit
    def test_env_file(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("# tuning\nFIX_AUGMENT_CONTEXT_OVERLAP_SIZE='50'\n")

        with patch.dict(os.environ):
            config = resolve_config(use_env_file=env_file)

        assert config.context_overlap_size == 50
        assert config.origin["context_overlap_size"] == "env"

    @pytest.mark.unit
    def test_malformed_env_file(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("NOT A PAIR\n")

        with pytest.raises(ConfigurationError) as exc_info:
            resolve_config(use_env_file=env_file)
        assert exc_info.value.code == "ENV_FILE_INVALID"

    @pytest.mark.unit
    def test_check_environment_lists_prefixed_variables(self, isolated_config_sources):
        with isolated_config_sources(env_vars={"CHUNK_MODE": "naive"}):
            assert check_environment()["FIX_AUGMENT_CHUNK_MODE"] == "naive"


class TestInvalidConfiguration:
    @pytest.mark.unit
    @pytest.mark.parametrize(
        "env_vars",
        [
            {"MIN_CHUNK_SIZE": "20000"},
            {"CONTEXT_OVERLAP_SIZE": "1000"},
            {"MAX_CHUNK_SIZE": "abc"},
            {"CHUNK_MODE": "greedy"},
            {"OUTPUT_FORMAT": "rtf"},
            {"CONTEXT_REFRESH_THRESHOLD": "0"},
        ],
    )
    def test_invalid_values_raise(self, isolated_config_sources, env_vars):
        with isolated_config_sources(env_vars=env_vars), pytest.raises(
            ConfigurationError
        ) as exc_info:
            resolve_config()

        assert exc_info.value.code == "INVALID_CONFIG"
        assert exc_info.value.details["errors"]

    @pytest.mark.unit
    def test_malformed_project_file_raises(self, isolated_config_sources):
        with isolated_config_sources(pyproject_content="[tool.fix_augment\n"):
            with pytest.raises(ConfigFileError) as exc_info:
                resolve_config()

        assert exc_info.value.code == "CONFIG_FILE_ERROR"
        assert isinstance(exc_info.value, ConfigurationError)

    @pytest.mark.unit
    def test_malformed_home_file_is_ignored(self, isolated_config_sources, caplog):
        with isolated_config_sources(home_content="not = [valid"):
            with caplog.at_level(logging.WARNING, logger="fix_augment.config.resolver"):
                config = resolve_config()

        assert config.max_chunk_size == 10000
        assert "Ignoring home configuration" in caplog.text


class TestProfiles:
    @pytest.mark.unit
    def test_listing_and_validation(self, isolated_config_sources):
        with isolated_config_sources(
            pyproject_content="[tool.fix_augment.profiles.ci]\nenabled = false\n",
            home_content="[profiles.local]\nenabled = true\n",
        ):
            assert list_available_profiles() == {"project": ["ci"], "home": ["local"]}
            assert validate_profile("ci") == {"project": True, "home": False}
            with pytest.raises(ValueError, match="Profile 'nope' not found"):
                validate_profile("nope")

    @pytest.mark.unit
    def test_profile_only_in_home_is_not_an_error(self, isolated_config_sources):
        with isolated_config_sources(
            pyproject_content="[tool.fix_augment]\nwarn_large_input = false\n",
            home_content="[profiles.local]\nmax_chunk_size = 5000\n",
        ):
            config = resolve_config(profile="local")

        assert config.max_chunk_size == 5000
        assert config.warn_large_input is True


class TestScopes:
    @pytest.mark.unit
    def test_config_override_applies_inside_scope_only(self):
        with config_override(max_chunk_size=4000):
            inner = resolve_config()
            with config_override(chunk_mode="naive"):
                nested = resolve_config()

        assert inner.max_chunk_size == 4000
        assert inner.origin["max_chunk_size"] == "programmatic"
        assert nested.max_chunk_size == 4000
        assert nested.chunk_mode is ChunkMode.NAIVE
        assert resolve_config().max_chunk_size == 10000

    @pytest.mark.unit
    def test_config_scope_with_programmatic_overrides(self):
        base = resolve_config().with_overrides(output_format="html")

        with config_scope(base):
            config = resolve_config({"enabled": False})

        assert config.output_format == "html"
        assert config.enabled is False

    @pytest.mark.unit
    def test_invalid_override_raises(self):
        with pytest.raises(ConfigurationError):
            resolve_config().with_overrides(max_chunk_size=10)


class TestFrozenConfig:
    @pytest.mark.unit
    def test_get_accepts_host_keys(self):
        frozen = resolve_config().to_frozen()

        assert frozen.get("maxChunkSize") == 10000
        assert frozen.get("fixAugment.chunkMode") == "smart"
        assert frozen.get("max_safe_input_size") == 8000
        assert frozen.get("nonexistent", 5) == 5

    @pytest.mark.unit
    def test_to_dict_round_trips(self):
        frozen = resolve_config().to_frozen()

        assert FrozenConfig(**frozen.to_dict()) == frozen

    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("key", "field"),
        [
            ("maxChunkSize", "max_chunk_size"),
            ("autoFixDoubleQuotes", "auto_fix_double_quotes"),
            ("fixAugment.contextOverlapSize", "context_overlap_size"),
            ("enabled", "enabled"),
        ],
    )
    def test_to_field_name(self, key, field):
        assert to_field_name(key) == field

    @pytest.mark.unit
    def test_env_var_names_cover_every_field(self):
        names = env_var_names()

        assert names["FIX_AUGMENT_CHUNK_MODE"] == "chunk_mode"
        assert set(names.values()) == set(FixAugmentSettings.model_fields)
