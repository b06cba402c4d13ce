"""
Unit Tests for configuration, logging and deferred type loading
"""

import pytest

from slotreflect import (
    ArgErr, Env, Log, LogLevel, NameErr, ParseErr, SafeClassLoad, Type,
    UnknownTypeErr, safe_load,
)
from sample_types import Animal


def _write_props(work_dir, text):
    path = work_dir / "etc" / "slotreflect" / "config.props"
    path.parent.mkdir(parents=True)
    path.write_text(text, encoding="utf-8")
    return path


class TestEnvConfig:
    """Tests for Env.config lookup order."""

    def test_config_when_env_var_set_then_env_wins(self, work_dir, monkeypatch):
        _write_props(work_dir, "log.level=warn\n")
        monkeypatch.setenv("SLOTREFLECT_LOG_LEVEL", "err")
        assert Env.cur().config("log.level") == "err"

    def test_config_when_props_file_then_value_read(self, work_dir):
        _write_props(work_dir, "# comment\n// other\n\nlog.level = debug\n")
        assert Env.cur().config("log.level") == "debug"

    def test_config_when_absent_then_default(self, work_dir):
        assert Env.cur().config("log.level", "info") == "info"
        assert Env.cur().config("missing.key") is None

    def test_read_props_when_line_without_equals_then_parse_err(self, work_dir):
        path = _write_props(work_dir, "novalue\n")
        with pytest.raises(ParseErr):
            Env.read_props(path)

    def test_vars_when_read_then_read_only_view(self, monkeypatch):
        monkeypatch.setenv("SLOTREFLECT_SAMPLE", "1")
        env_vars = Env.cur().vars()
        assert env_vars["SLOTREFLECT_SAMPLE"] == "1"
        with pytest.raises(TypeError):
            env_vars["SLOTREFLECT_SAMPLE"] = "2"

    def test_work_dir_when_overridden_then_used(self, work_dir):
        assert Env.cur().work_dir() == work_dir
        assert Env.cur().config_file() == work_dir / "etc" / "slotreflect" / "config.props"


class TestLog:
    """Tests for log levels and configured logs."""

    def test_from_str_when_known_then_level(self):
        assert LogLevel.from_str("WARN") is LogLevel.warn
        assert LogLevel.from_str("loud", False) is None
        with pytest.raises(ParseErr):
            LogLevel.from_str("loud")

    def test_levels_when_compared_then_ordered(self):
        assert LogLevel.debug < LogLevel.info < LogLevel.warn < LogLevel.err < LogLevel.silent

    def test_log_when_created_then_level_from_config(self, work_dir, monkeypatch):
        monkeypatch.setenv("SLOTREFLECT_LOG_LEVEL", "debug")
        log = Log("tests.configured", register=False)
        assert log.level() is LogLevel.debug
        assert log.is_debug()

    def test_log_when_config_level_unknown_then_info(self, work_dir, monkeypatch):
        monkeypatch.setenv("SLOTREFLECT_LOG_LEVEL", "chatty")
        assert Log("tests.unknown_level", register=False).level() is LogLevel.info

    def test_log_when_invalid_name_then_name_err(self):
        with pytest.raises(NameErr):
            Log("bad name!", register=False)

    def test_get_when_called_twice_then_same_log(self, work_dir):
        log = Log.get("tests.registry")
        assert Log.get("tests.registry") is log
        assert Log.find("tests.registry") is log
        with pytest.raises(ArgErr):
            Log("tests.registry")

    def test_find_when_unknown_unchecked_then_none(self):
        assert Log.find("tests.never_created", False) is None

    def test_handler_when_level_enabled_then_receives_record(self, work_dir):
        log = Log("tests.handler", register=False)
        recs = []
        handler = recs.append
        Log.add_handler(handler)
        try:
            log.info("hello")
            log.debug("hidden")
        finally:
            Log.remove_handler(handler)
        assert [r.msg() for r in recs] == ["hello"]
        assert recs[0].log_name() == "tests.handler"

    def test_add_handler_when_not_callable_then_arg_err(self):
        with pytest.raises(ArgErr):
            Log.add_handler("nope")


class TestSafeClassLoad:
    """Tests for deferred type loading."""

    def test_get_when_type_exists_then_loaded_once(self):
        handle = safe_load("sample_types.Animal")
        assert isinstance(handle, SafeClassLoad)
        assert not handle.is_loaded()
        assert handle.get() == Type.of_class(Animal)
        assert handle.is_loaded()

    def test_load_when_missing_then_unknown_type_err(self):
        with pytest.raises(UnknownTypeErr):
            safe_load("sample_types.Unicorn").load()

    def test_try_load_when_missing_then_false_and_debug_logged(self):
        log = Log.get("slotreflect")
        saved = log.level()
        recs = []
        handler = recs.append
        log.level(LogLevel.debug)
        Log.add_handler(handler)
        try:
            handle = safe_load("sample_types.Unicorn")
            assert handle.try_load() is False
            assert not handle.is_loaded()
        finally:
            Log.remove_handler(handler)
            log.level(saved)
        loads = [r for r in recs if "sample_types.Unicorn" in r.msg() and r.err() is not None]
        assert loads
        assert loads[-1].level() is LogLevel.debug
        assert isinstance(loads[-1].err(), UnknownTypeErr)

    def test_try_load_when_present_then_true(self):
        assert safe_load("builtins.str").try_load() is True
