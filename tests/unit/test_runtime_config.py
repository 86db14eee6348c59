"""
Loader Configuration Tests

Tests for LoaderConfig loading from dicts, YAML and environment variables,
plus the shared extraction workspace helpers.
"""

import logging
import tempfile
from pathlib import Path

import pytest

from core.config import LoaderConfig, get_default_config, set_default_config, setup_logging
from core.schemas import MAX_SUPPORTED_MANIFEST_VERSION
from codetransform.artifacts.workspace import (
    EXTRACTION_DIR_NAME,
    ExtractionWorkspace,
    clear_extraction_cache,
    get_extraction_root,
)


ENV_VARS = [
    "CODETRANSFORM_EXTRACTION_ROOT",
    "CODETRANSFORM_MAX_MANIFEST_VERSION",
    "CODETRANSFORM_CLEANUP_ON_FAILURE",
    "CODETRANSFORM_LOG_LEVEL",
]


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    yield monkeypatch
    set_default_config(None)


class TestLoaderConfig:
    """Test configuration sources."""

    def test_defaults(self, clean_env):
        config = LoaderConfig.from_env()

        assert config.max_supported_version == MAX_SUPPORTED_MANIFEST_VERSION
        assert config.extraction_root is None
        assert config.manifest_filename == "manifest.json"
        assert config.summary_filename == "summary.md"
        assert config.single_patch_filename == "diff.patch"
        assert config.description_suffix == ".json"
        assert config.cleanup_on_failure is True

    def test_from_dict_ignores_unknown_keys(self):
        config = LoaderConfig.from_dict({"max_supported_version": 2.0, "bogus": 1})
        assert config.max_supported_version == 2.0

    def test_from_dict_coerces_extraction_root(self):
        config = LoaderConfig.from_dict({"extraction_root": "/tmp/ct"})
        assert config.extraction_root == Path("/tmp/ct")

    def test_from_yaml(self, workdir):
        path = workdir / "loader.yaml"
        path.write_text(
            "max_supported_version: 1.5\n"
            "cleanup_on_failure: false\n"
            "log_level: DEBUG\n",
            encoding="utf-8",
        )

        config = LoaderConfig.from_yaml(path)

        assert config.max_supported_version == 1.5
        assert config.cleanup_on_failure is False
        assert config.log_level == "DEBUG"

    def test_from_yaml_missing_file(self, workdir):
        with pytest.raises(FileNotFoundError):
            LoaderConfig.from_yaml(workdir / "missing.yaml")

    def test_from_env(self, clean_env, workdir):
        clean_env.setenv("CODETRANSFORM_EXTRACTION_ROOT", str(workdir))
        clean_env.setenv("CODETRANSFORM_MAX_MANIFEST_VERSION", "2.0")
        clean_env.setenv("CODETRANSFORM_CLEANUP_ON_FAILURE", "false")
        clean_env.setenv("CODETRANSFORM_LOG_LEVEL", "debug")

        config = LoaderConfig.from_env()

        assert config.extraction_root == workdir
        assert config.max_supported_version == 2.0
        assert config.cleanup_on_failure is False
        assert config.log_level == "DEBUG"

    def test_with_env_overrides_returns_copy(self, clean_env):
        base = LoaderConfig(max_supported_version=1.0)
        clean_env.setenv("CODETRANSFORM_MAX_MANIFEST_VERSION", "3.0")

        overridden = base.with_env_overrides()

        assert overridden.max_supported_version == 3.0
        assert base.max_supported_version == 1.0

    def test_with_env_overrides_noop(self, clean_env):
        base = LoaderConfig()
        assert base.with_env_overrides() is base

    def test_default_config_round_trip(self, clean_env):
        custom = LoaderConfig(max_supported_version=4.0)
        set_default_config(custom)
        assert get_default_config() is custom

    def test_to_dict(self):
        data = LoaderConfig(extraction_root=Path("/x")).to_dict()
        assert data["extraction_root"] == "/x"
        assert LoaderConfig.from_dict(data).extraction_root == Path("/x")


class TestWorkspace:
    """Test extraction workspace helpers."""

    def test_workspaces_are_unique(self, workdir):
        first = ExtractionWorkspace.create("artifact.zip", workdir)
        second = ExtractionWorkspace.create("artifact.zip", workdir)

        assert first.path != second.path
        assert first.path.name.startswith("artifact-")

    def test_unsafe_stem_is_sanitized(self, workdir):
        workspace = ExtractionWorkspace.create("my job (1).zip", workdir)
        assert workspace.path.name.startswith("my_job_1_-")

    def test_resolve_rejects_escape(self, workdir):
        workspace = ExtractionWorkspace.create("a.zip", workdir)

        assert workspace.resolve("patch") == workspace.path / "patch"
        assert workspace.resolve(".") == workspace.path
        with pytest.raises(ValueError):
            workspace.resolve("../sibling")

    def test_cleanup(self, workdir):
        workspace = ExtractionWorkspace.create("a.zip", workdir)
        workspace.cleanup()
        assert not workspace.path.exists()

    def test_clear_explicit_root(self, workdir):
        root = get_extraction_root(workdir / "cache")
        ExtractionWorkspace.create("a.zip", root)

        clear_extraction_cache(root)
        assert not root.exists()

    def test_default_root_is_shared(self):
        first = get_extraction_root()
        second = get_extraction_root()

        assert first == second
        assert first.is_dir()

    def test_default_root_name_is_unpredictable(self):
        root = get_extraction_root()

        assert root.name.startswith(EXTRACTION_DIR_NAME)
        assert root != (Path(tempfile.gettempdir()) / EXTRACTION_DIR_NAME).resolve()

    def test_default_root_recreated_after_clear(self):
        first = get_extraction_root()
        clear_extraction_cache()

        assert not first.exists()
        second = get_extraction_root()
        assert second.is_dir()
        assert second != first


class TestLogging:
    """Test logging setup."""

    def test_setup_logging_sets_level(self):
        root = logging.getLogger()
        saved_level, saved_handlers = root.level, list(root.handlers)
        try:
            setup_logging("DEBUG")
            assert root.level == logging.DEBUG
            setup_logging("not-a-level")
            assert root.level == logging.INFO
            LoaderConfig(log_level="DEBUG").configure_logging()
            assert root.level == logging.DEBUG
        finally:
            for handler in list(root.handlers):
                root.removeHandler(handler)
            for handler in saved_handlers:
                root.addHandler(handler)
            root.setLevel(saved_level)
