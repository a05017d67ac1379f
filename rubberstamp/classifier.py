"""Edit classifier for TypeScript Edit tool calls.

Pure functions, no I/O, no state. Decides whether a proposed
old -> new replacement is safe enough to skip the permission prompt:
  1. Formatting-only - texts are identical once whitespace is removed
  2. Import statement - an import line added, removed, or replaced

Anything else defers to the normal permission flow. There is no deny.

>>> classify("const x=1", "const x = 1").approved
True
>>> classify("const x = 1", "const x = 2") == DEFER
True
"""

import re
from dataclasses import dataclass
from typing import Optional

APPROVE_REASON = "Auto-approved: Safe edit detected"

# Anchored at the start of the text; \s* also skips leading blank lines
IMPORT_RE = re.compile(r"^\s*import\s+")


@dataclass(frozen=True)
class Verdict:
    """Outcome of classifying an edit: approve with a reason, or defer."""

    approved: bool
    reason: Optional[str] = None

    def __post_init__(self):
        # Approvals always carry a reason; deferrals never do
        if self.approved:
            valid = bool(self.reason)
        else:
            valid = self.reason is None
        if not valid:
            raise ValueError(
                f"Invalid verdict: approved={self.approved!r}, reason={self.reason!r}"
            )

    @classmethod
    def approve(cls, reason: str = APPROVE_REASON) -> "Verdict":
        return cls(approved=True, reason=reason)


DEFER = Verdict(approved=False)


def _strip_whitespace(text: str) -> str:
    return "".join(c for c in text if not c.isspace())


def is_formatting_only_change(old_text: str, new_text: str) -> bool:
    """True if the texts differ only in whitespace.

    >>> is_formatting_only_change("a  =\\tb", "a=b")
    True
    >>> is_formatting_only_change("", "")
    True
    >>> is_formatting_only_change("a = b", "a = c")
    False
    """
    return _strip_whitespace(old_text) == _strip_whitespace(new_text)


def is_import_statement_change(old_text: str, new_text: str) -> bool:
    """True if an import is being replaced, inserted, or deleted.

    >>> is_import_statement_change("import A from 'a'", "import B from 'b'")
    True
    >>> is_import_statement_change("", "import Foo from 'foo'")
    True
    >>> is_import_statement_change("import Foo", "const x = 1")
    False
    """
    old_is_import = IMPORT_RE.match(old_text) is not None
    new_is_import = IMPORT_RE.match(new_text) is not None

    if old_is_import and new_is_import:
        return True

    # Adding an import where there was nothing
    if not old_text.strip() and new_is_import:
        return True

    # Removing an import entirely
    if old_is_import and not new_text.strip():
        return True

    return False


def classify(old_text: str, new_text: str) -> Verdict:
    """Classify an edit. First matching rule wins; never raises."""
    if is_formatting_only_change(old_text, new_text):
        return Verdict.approve()

    if is_import_statement_change(old_text, new_text):
        return Verdict.approve()

    return DEFER
