"""
rubberstamp - PreToolUse hook that auto-approves safe TypeScript edits.

Formatting-only changes and import-statement changes to .ts/.tsx files
are approved without a permission prompt. Everything else falls through
to Claude Code's normal approval flow.

  rubberstamp install user       - register in ~/.claude/settings.json
  rubberstamp install project    - register in .claude/settings.json
"""

__version__ = "0.1.0"

from rubberstamp.classifier import DEFER, Verdict, classify

__all__ = [
    "__version__",
    "DEFER",
    "Verdict",
    "classify",
]
