"""Tests for Config loading and logger setup."""

import logging

import pytest

from rulefix.config import Config, setup_logger


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ("RULEFIX_MAX_FIX_PASSES", "RULEFIX_VALIDATE_SYNTAX",
                "RULEFIX_LOG_LEVEL", "RULEFIX_LOG_DIR"):
        monkeypatch.delenv(key, raising=False)


class TestConfig:
    def test_defaults(self):
        cfg = Config()
        assert cfg.MAX_FIX_PASSES == 10
        assert cfg.VALIDATE_SYNTAX is True
        assert cfg.LOG_LEVEL == "WARNING"
        assert cfg.LOG_DIR == ""

    def test_yaml_file(self, tmp_path):
        path = tmp_path / ".rulefix.yaml"
        path.write_text("max_fix_passes: 3\nvalidate_syntax: false\nlog_level: debug\n")
        cfg = Config.load(str(path))
        assert cfg.MAX_FIX_PASSES == 3
        assert cfg.VALIDATE_SYNTAX is False
        assert cfg.LOG_LEVEL == "DEBUG"

    def test_env_overrides_yaml(self, monkeypatch):
        monkeypatch.setenv("RULEFIX_MAX_FIX_PASSES", "7")
        cfg = Config({"max_fix_passes": 3})
        assert cfg.MAX_FIX_PASSES == 7

    def test_malformed_yaml_ignored(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("max_fix_passes: [unclosed\n")
        assert Config.load(str(path)).MAX_FIX_PASSES == 10

    def test_missing_explicit_path_uses_defaults(self, tmp_path):
        assert Config.load(str(tmp_path / "nope.yaml")).MAX_FIX_PASSES == 10

    def test_found_in_cwd(self, tmp_path, monkeypatch):
        (tmp_path / ".rulefix.yml").write_text("max_fix_passes: 4\n")
        monkeypatch.chdir(tmp_path)
        assert Config.load().MAX_FIX_PASSES == 4


class TestSetupLogger:
    def test_level(self):
        logger = setup_logger("debug")
        assert logger.name == "rulefix"
        assert logger.level == logging.DEBUG

    def test_file_handler(self, tmp_path):
        logger = setup_logger("INFO", str(tmp_path / "logs"))
        try:
            handlers = [h for h in logger.handlers if isinstance(h, logging.FileHandler)]
            assert handlers
            assert (tmp_path / "logs").is_dir()
        finally:
            for h in list(logger.handlers):
                logger.removeHandler(h)
                h.close()
