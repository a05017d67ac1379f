"""
Hook registration in Claude Code settings files.

Installs (or replaces) the PreToolUse entry that runs rubberstamp on
Edit tool calls. Only hooks.PreToolUse is modelled; every other field of
the settings document is carried through untouched.

Settings locations:
    user     ~/.claude/settings.json
    project  ./.claude/settings.json
"""

from __future__ import annotations

import json
import logging
import shutil
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, ValidationError

logger = logging.getLogger(__name__)

# Substring identifying our hook command in existing settings
HOOK_MARKER = "rubberstamp"
HOOK_MATCHER = "Edit"
LOCATIONS = ("user", "project")


class InstallError(Exception):
    """Raised when the settings file cannot be resolved, read, or written."""


class HookCommand(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    command_type: str = Field(default="command", alias="type")
    command: str = ""


class HookMatcher(BaseModel):
    model_config = ConfigDict(extra="allow")

    matcher: str = ""
    hooks: list[HookCommand] = Field(default_factory=list)

    # Entry as read from disk, written back verbatim when left in place
    _raw: Optional[dict[str, Any]] = PrivateAttr(default=None)

    def references(self, marker: str) -> bool:
        return any(marker in h.command for h in self.hooks)


class HookSettings(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    pre_tool_use: list[HookMatcher] = Field(default_factory=list, alias="PreToolUse")


class ClaudeSettings(BaseModel):
    model_config = ConfigDict(extra="allow")

    hooks: HookSettings = Field(default_factory=HookSettings)


@dataclass
class LoadedSettings:
    """Typed view of the settings plus the raw document it came from."""

    settings: ClaudeSettings
    document: dict[str, Any]

    def to_document(self) -> dict[str, Any]:
        """Write the PreToolUse list back into the raw document, in place.

        Key order and untouched values of the original document are kept.
        """
        hooks = self.document.get("hooks")
        if not isinstance(hooks, dict):
            hooks = {}
            self.document["hooks"] = hooks
        hooks["PreToolUse"] = [
            m._raw if m._raw is not None else m.model_dump(by_alias=True, exclude_unset=True)
            for m in self.settings.hooks.pre_tool_use
        ]
        return self.document


@dataclass
class InstallResult:
    settings_path: Path
    command: str
    replaced: bool


def settings_path_for(location: str) -> Path:
    """Resolve the settings file for an install location.

    >>> settings_path_for("project")
    PosixPath('.claude/settings.json')
    """
    if location == "user":
        try:
            home = Path.home()
        except RuntimeError as e:
            raise InstallError("Could not find home directory") from e
        return home / ".claude" / "settings.json"
    if location == "project":
        return Path(".claude") / "settings.json"
    raise InstallError(f"Invalid location '{location}'. Use 'user' or 'project'")


def hook_command() -> str:
    """Command registered in settings: the current interpreter running this package."""
    python_exe = sys.executable
    if not python_exe or not Path(python_exe).exists():
        python_exe = shutil.which("python3") or shutil.which("python") or "python"

    # Forward slashes work on Windows too
    python_path = str(Path(python_exe)).replace("\\", "/")
    return f"{python_path} -m {HOOK_MARKER}"


def load_settings(settings_path: Path) -> LoadedSettings:
    """Read a settings file. Missing or blank files give empty settings."""
    if not settings_path.exists():
        return LoadedSettings(ClaudeSettings(), {})

    try:
        content = settings_path.read_text(encoding="utf-8")
    except OSError as e:
        raise InstallError(f"Could not read {settings_path}: {e}") from e

    if not content.strip():
        return LoadedSettings(ClaudeSettings(), {})

    try:
        document = json.loads(content)
    except json.JSONDecodeError as e:
        raise InstallError(f"Malformed settings file {settings_path}: {e}") from e

    if not isinstance(document, dict):
        raise InstallError(f"Malformed settings file {settings_path}: expected a JSON object")

    try:
        settings = ClaudeSettings.model_validate(document)
    except ValidationError as e:
        raise InstallError(f"Malformed settings file {settings_path}: {e}") from e

    raw_entries = document.get("hooks", {}).get("PreToolUse", [])
    for entry, raw in zip(settings.hooks.pre_tool_use, raw_entries):
        entry._raw = raw

    return LoadedSettings(settings, document)


def save_settings(settings_path: Path, loaded: LoadedSettings) -> None:
    try:
        settings_path.write_text(
            json.dumps(loaded.to_document(), indent=2, ensure_ascii=False),
            encoding="utf-8",
        )
    except OSError as e:
        raise InstallError(f"Could not write {settings_path}: {e}") from e


def _is_ours(entry: HookMatcher) -> bool:
    return entry.matcher == HOOK_MATCHER and entry.references(HOOK_MARKER)


def install_hook(location: str) -> InstallResult:
    """Install or replace the rubberstamp PreToolUse hook.

    Any existing Edit entry referencing rubberstamp is dropped before the
    fresh entry is appended, so repeated installs leave exactly one.
    """
    settings_path = settings_path_for(location)
    command = hook_command()

    try:
        settings_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise InstallError(f"Could not create {settings_path.parent}: {e}") from e

    loaded = load_settings(settings_path)
    entries = loaded.settings.hooks.pre_tool_use

    kept = [m for m in entries if not _is_ours(m)]
    replaced = len(kept) < len(entries)
    if replaced:
        logger.debug("Replacing %d existing rubberstamp entries", len(entries) - len(kept))

    kept.append(HookMatcher(
        matcher=HOOK_MATCHER,
        hooks=[HookCommand(command_type="command", command=command)],
    ))
    loaded.settings.hooks.pre_tool_use = kept

    save_settings(settings_path, loaded)
    return InstallResult(settings_path=settings_path, command=command, replaced=replaced)


def uninstall_hook(location: str) -> bool:
    """Remove the rubberstamp hook. Returns True if anything was removed."""
    settings_path = settings_path_for(location)
    if not settings_path.exists():
        return False

    loaded = load_settings(settings_path)
    entries = loaded.settings.hooks.pre_tool_use
    kept = [m for m in entries if not _is_ours(m)]
    if len(kept) == len(entries):
        return False

    loaded.settings.hooks.pre_tool_use = kept
    save_settings(settings_path, loaded)
    return True
