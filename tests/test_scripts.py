import importlib
import sys

import dotenv
import pytest

import sentiment.config as config_mod


@pytest.fixture
def fresh_import(monkeypatch):
    """Import a script module with `.env` values applied by a fake load_dotenv."""
    def _import(name, env):
        def fake_load_dotenv(*args, **kwargs):
            for k, v in env.items():
                monkeypatch.setenv(k, v)
            return True
        monkeypatch.setattr(dotenv, "load_dotenv", fake_load_dotenv)
        # Settings reads the environment when sentiment.config is imported
        monkeypatch.setattr(sys.modules["sentiment"], "config", config_mod)
        monkeypatch.delitem(sys.modules, "sentiment.config")
        monkeypatch.delitem(sys.modules, name, raising=False)
        return importlib.import_module(name)
    return _import


def test_serve_applies_dotenv(fresh_import):
    mod = fresh_import("scripts.serve", {"PORT": "4443"})
    assert mod.Settings().PORT == 4443

def test_live_interview_applies_dotenv(fresh_import):
    mod = fresh_import("scripts.live_interview",
                       {"ANTHROPIC_MODEL": "claude-from-dotenv", "CAMERA_INDEX": "7"})
    s = mod.Settings()
    assert s.ANTHROPIC_MODEL == "claude-from-dotenv"
    assert s.CAMERA_INDEX == 7
