"""Shared fixtures for rubberstamp tests."""

import json

import pytest
from pathlib import Path


@pytest.fixture
def hook_input():
    """Factory for hook input documents (as dicts)."""
    def _create(tool_name="Edit", file_path="test.ts", old_string=None, new_string=None):
        tool_input = {"file_path": file_path}
        if old_string is not None:
            tool_input["old_string"] = old_string
        if new_string is not None:
            tool_input["new_string"] = new_string
        return {
            "session_id": "test-session",
            "transcript_path": "/tmp/test-transcript",
            "tool_name": tool_name,
            "tool_input": tool_input,
        }
    return _create


@pytest.fixture
def hook_stdin(hook_input):
    """Factory for hook input serialized as it arrives on stdin."""
    def _create(*args, **kwargs):
        return json.dumps(hook_input(*args, **kwargs))
    return _create


@pytest.fixture
def fake_home(tmp_path, monkeypatch):
    """Isolated home and working directory for settings/log tests."""
    home = tmp_path / "home"
    work = tmp_path / "work"
    home.mkdir()
    work.mkdir()
    monkeypatch.setattr(Path, "home", classmethod(lambda cls: home))
    monkeypatch.chdir(work)
    monkeypatch.delenv("RUBBERSTAMP_ENABLE_LOGS", raising=False)
    return home
