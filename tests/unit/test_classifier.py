"""Unit tests for the edit classifier.

Pure functions only: formatting-only detection, import-statement
detection, and the first-match-wins ordering in classify().
"""

import pytest

from rubberstamp.classifier import (
    APPROVE_REASON,
    DEFER,
    Verdict,
    classify,
    is_formatting_only_change,
    is_import_statement_change,
)


# ---------------------------------------------------------------------------
# Verdict
# ---------------------------------------------------------------------------

class TestVerdict:

    def test_approve_default_reason(self):
        v = Verdict.approve()
        assert v.approved is True
        assert v.reason == APPROVE_REASON

    def test_defer_has_no_reason(self):
        assert DEFER.approved is False
        assert DEFER.reason is None

    def test_immutable(self):
        with pytest.raises(AttributeError):
            DEFER.approved = True

    @pytest.mark.parametrize("approved, reason", [
        (True, None),
        (True, ""),
        (False, "not a deferral"),
        (False, ""),
    ])
    def test_invalid_shapes_rejected(self, approved, reason):
        with pytest.raises(ValueError, match="Invalid verdict"):
            Verdict(approved=approved, reason=reason)

    def test_approve_requires_reason(self):
        with pytest.raises(ValueError):
            Verdict.approve("")


# ---------------------------------------------------------------------------
# is_formatting_only_change
# ---------------------------------------------------------------------------

class TestFormattingOnly:

    def test_added_spaces(self):
        assert is_formatting_only_change("const x=1", "const x = 1")

    def test_tabs_vs_spaces(self):
        assert is_formatting_only_change("\tconst x = 1;", "    const x = 1;")

    def test_crlf_vs_lf(self):
        assert is_formatting_only_change("const x = 1;\r\nconst y = 2;", "const x = 1;\nconst y = 2;")

    def test_trailing_whitespace(self):
        assert is_formatting_only_change("const x = 1;  ", "const x = 1;")

    def test_reindented_block(self):
        old = "function f() {\nreturn 1;\n}"
        new = "function f() {\n    return 1;\n}"
        assert is_formatting_only_change(old, new)

    def test_unicode_whitespace(self):
        assert is_formatting_only_change("a\u00a0=\u2003b", "a = b")

    def test_both_empty(self):
        assert is_formatting_only_change("", "")

    def test_value_change(self):
        assert not is_formatting_only_change("const x = 1", "const x = 2")

    def test_whitespace_inside_string_literal_still_whitespace(self):
        # Whitespace is stripped everywhere, string literals included
        assert is_formatting_only_change('"a b"', '"ab"')


# ---------------------------------------------------------------------------
# is_import_statement_change
# ---------------------------------------------------------------------------

class TestImportStatementChange:

    def test_import_replaced_by_import(self):
        assert is_import_statement_change(
            "import { A } from 'a'", "import { A, B } from 'a'"
        )

    def test_insert_into_empty(self):
        assert is_import_statement_change("", "import Foo from 'foo'")

    def test_insert_into_whitespace_only(self):
        assert is_import_statement_change("  \n\t", "import Foo from 'foo'")

    def test_delete_import(self):
        assert is_import_statement_change("import Foo from 'foo'", "")

    def test_delete_import_leaving_whitespace(self):
        assert is_import_statement_change("import Foo from 'foo'", "\n\n")

    def test_leading_indentation(self):
        assert is_import_statement_change("   import a from 'a'", "\timport b from 'b'")

    def test_leading_blank_lines(self):
        assert is_import_statement_change("\n\nimport a from 'a'", "import b from 'b'")

    def test_import_type(self):
        assert is_import_statement_change("", "import type { Props } from './types'")

    def test_old_not_import_and_nonempty(self):
        assert not is_import_statement_change("const x = 1", "import Foo")

    def test_import_to_code(self):
        assert not is_import_statement_change("import Foo", "const x = doSomething()")

    def test_keyword_needs_trailing_whitespace(self):
        assert not is_import_statement_change("", "importFoo")

    def test_dynamic_import_call_not_statement(self):
        assert not is_import_statement_change("", "import('./lazy')")

    def test_import_later_in_text_not_matched(self):
        assert not is_import_statement_change("", "const a = 1;\nimport b from 'b'")

    def test_identifier_containing_import(self):
        assert not is_import_statement_change("", "reimport x")


# ---------------------------------------------------------------------------
# classify - properties
# ---------------------------------------------------------------------------

class TestClassify:

    @pytest.mark.parametrize("text", [
        "",
        "const x = 1",
        "function add(a, b) { return a + b; }",
        "import Foo from 'foo'",
        "   \n\t",
    ])
    def test_identical_text_approved(self, text):
        assert classify(text, text).approved

    def test_empty_noop_approved(self):
        assert classify("", "") == Verdict.approve()

    def test_whitespace_only_difference_approved(self):
        assert classify("if(x){y()}", "if (x) {\n  y()\n}").approved

    def test_not_import_into_import_defers(self):
        assert classify("const x = 1", "import Foo") == DEFER

    def test_import_modified_approved(self):
        v = classify("import { A } from 'a'", "import { A, B } from 'a'")
        assert v.approved
        assert v.reason == APPROVE_REASON

    def test_import_inserted_approved(self):
        assert classify("", "import Foo from 'foo'").approved

    def test_import_deleted_approved(self):
        assert classify("import Foo from 'foo'", "").approved

    def test_import_replaced_with_code_defers(self):
        assert classify("import Foo", "const x = doSomething()") == DEFER


class TestClassifyDefers:
    """Real changes to logic or structure never auto-approve."""

    @pytest.mark.parametrize("old, new", [
        ("const x = 1", "const x = 2"),
        ("function add(a, b) { return a + b; }", "function add(a, b) { return a * b; }"),
        ("const x = 1", "const x = 1; console.log(x);"),
        ('const message = "Hello"', 'const message = "Goodbye"'),
        ("class Test { }", "class Test { method() { return 1; } }"),
        ("class Test extends Base { }", "class Test extends Other { }"),
        ("const temp = getValue()", "const result = getValue()"),
        ("function process(data) { return data; }", "function process(input) { return input; }"),
        ("const regex = /test.*/;", "const regex: RegExp = /test.*/;"),
        ("const fn = (x) => x", "const fn: (x: number) => number = (x) => x"),
        ("function test() {}", "/**\n * Docs\n */\nfunction test() {}"),
        ("", "const x = 1"),
        ("const x = 1", ""),
    ])
    def test_defers(self, old, new):
        assert classify(old, new) == DEFER
