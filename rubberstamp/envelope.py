"""Hook envelope parsing and decision output for PreToolUse events.

Input (stdin):
  {"session_id": ..., "transcript_path": ..., "tool_name": "Edit",
   "tool_input": {"file_path": ..., "old_string": ..., "new_string": ...}}

Output (stdout):
  Approve:  {"decision":"approve","reason":"Auto-approved: Safe edit detected"}
  Defer:    {}  (normal permission check)
"""

import json
import logging
from dataclasses import dataclass
from typing import Literal, Optional

from pydantic import BaseModel, ValidationError

from rubberstamp.classifier import DEFER, Verdict, classify

logger = logging.getLogger(__name__)

EDIT_TOOL = "Edit"
TYPESCRIPT_SUFFIXES = (".ts", ".tsx")


class EnvelopeError(ValueError):
    """Raised when the hook input cannot be decoded."""


class ToolInput(BaseModel):
    file_path: str
    old_string: Optional[str] = None
    new_string: Optional[str] = None


class HookInput(BaseModel):
    session_id: str
    transcript_path: str
    tool_name: str
    tool_input: ToolInput


class HookOutput(BaseModel):
    decision: Optional[Literal["approve"]] = None
    reason: Optional[str] = None


@dataclass(frozen=True)
class EditRequest:
    """One proposed edit, with absent texts normalized to empty strings."""

    file_path: str
    old_text: str = ""
    new_text: str = ""

    @classmethod
    def from_tool_input(cls, tool_input: ToolInput) -> "EditRequest":
        return cls(
            file_path=tool_input.file_path,
            old_text=tool_input.old_string or "",
            new_text=tool_input.new_string or "",
        )


def parse_hook_input(raw: str) -> HookInput:
    """Decode and validate the hook input document.

    >>> parse_hook_input('not json')
    Traceback (most recent call last):
    ...
    rubberstamp.envelope.EnvelopeError: Error parsing JSON input: Expecting value: line 1 column 1 (char 0)
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise EnvelopeError(f"Error parsing JSON input: {e}") from e

    try:
        return HookInput.model_validate(data)
    except ValidationError as e:
        raise EnvelopeError(f"Error parsing JSON input: {e}") from e


def is_typescript_file(path: str) -> bool:
    """
    >>> is_typescript_file("src/components/Button.tsx")
    True
    >>> is_typescript_file("component.test.ts")
    True
    >>> is_typescript_file("index.js")
    False
    """
    return path.endswith(TYPESCRIPT_SUFFIXES)


def should_classify(hook_input: HookInput) -> bool:
    """Only Edit tool calls on TypeScript files reach the classifier."""
    return (
        hook_input.tool_name == EDIT_TOOL
        and is_typescript_file(hook_input.tool_input.file_path)
    )


def evaluate(hook_input: HookInput) -> Verdict:
    if not should_classify(hook_input):
        logger.debug("Skipping %s on %s", hook_input.tool_name, hook_input.tool_input.file_path)
        return DEFER

    request = EditRequest.from_tool_input(hook_input.tool_input)
    return classify(request.old_text, request.new_text)


def to_hook_output(verdict: Verdict) -> HookOutput:
    if verdict.approved:
        return HookOutput(decision="approve", reason=verdict.reason)
    return HookOutput()


def render_output(verdict: Verdict) -> str:
    """Serialize a verdict as compact JSON. Absent fields are omitted.

    >>> render_output(DEFER)
    '{}'
    >>> render_output(Verdict.approve("ok"))
    '{"decision":"approve","reason":"ok"}'
    """
    return to_hook_output(verdict).model_dump_json(exclude_none=True)


def parse_hook_output(text: str) -> HookOutput:
    return HookOutput.model_validate_json(text)
