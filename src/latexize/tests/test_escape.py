"""
Tests for the single-scan LaTeX escaper.
"""

from __future__ import annotations

import pytest

from latexize import LATEX_RULES, ReplacementRule, RuleSet, escape, escape_latex
from latexize import latexize as latexize_text


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("", ""),
        ("100% done", "100\\% done"),
        ("a_b^c", "a\\_b\\textasciicircum{}c"),
        ("{x}", "\\{x\\}"),
        ("straße", "stra\\ss{}e"),
        ("\\", "\\textbackslash{}"),
        ("R&D #1 costs $5", "R\\&D \\#1 costs \\$5"),
        ("~", "\\textasciitilde{}"),
    ],
)
def test_escape_fixed_scenarios(text: str, expected: str) -> None:
    """Each reserved character maps to its LaTeX-safe replacement."""

    assert escape(text) == expected
    assert latexize_text(text) == expected


def test_escape_is_identity_without_reserved_characters() -> None:
    """Plain text, including non-ASCII outside the rule set, is unchanged."""

    text = "Plain text, with punctuation! (and café) 123 <>|"
    assert escape(text) == text


def test_escape_does_not_double_escape_backslashes_and_braces() -> None:
    """Text inserted by one rule is never rescanned by another."""

    assert escape("\\{") == "\\textbackslash{}\\{"
    assert escape("{\\}") == "\\{\\textbackslash{}\\}"
    assert escape("\\textbf{x}") == "\\textbackslash{}textbf\\{x\\}"


def test_escape_only_reserved_characters() -> None:
    """A string made only of reserved characters escapes each one in place."""

    text = "".join(LATEX_RULES.matches())
    expected = "".join(rule.replacement for rule in LATEX_RULES)
    assert escape(text) == expected


def test_escape_leaves_no_raw_reserved_character_outside_replacements() -> None:
    """Stripping the inserted replacements leaves no reserved characters."""

    text = "a{b}c\\d&e%f$g#h_i~j^kßl"
    out = escape(text)
    for rule in sorted(LATEX_RULES, key=lambda r: -len(r.replacement)):
        out = out.replace(rule.replacement, "")
    assert out == "abcdefghijkl"


def test_escape_is_not_idempotent_for_braces() -> None:
    """Escaping twice changes text containing braces again."""

    once = escape("{")
    assert escape(once) != once
    assert escape(once) == "\\textbackslash{}\\{"


def test_escape_with_custom_rules_uses_first_matching_rule() -> None:
    """Custom rule sets are applied literally; earlier rules win ties."""

    rules = RuleSet.from_pairs([("ab", "X"), ("a", "Y"), (".*", "[dot-star]")])
    assert escape("aab.*", rules) == "YX[dot-star]"
    assert escape("abc", []) == "abc"
    assert escape("a-a", [ReplacementRule("a", "b")]) == "b-b"


def test_replacement_rule_rejects_empty_match() -> None:
    """An empty match literal cannot form a rule."""

    with pytest.raises(ValueError):
        ReplacementRule("", "x")


def test_escape_latex_handles_none_and_non_strings() -> None:
    """None becomes an empty string and other values are stringified."""

    assert escape_latex(None) == ""
    assert escape_latex(50) == "50"
    assert escape_latex("5%") == "5\\%"


def test_escape_latex_encode_unicode() -> None:
    """Non-ASCII characters outside the rule set are encoded on request."""

    assert escape_latex("café") == "café"
    assert escape_latex("café", encode_unicode=True) == "caf\\'e"
    assert escape_latex("straße", encode_unicode=True) == "stra\\ss{}e"
    assert escape_latex("50% é", encode_unicode=True) == "50\\% \\'e"


def test_escape_mixed_braces_and_backslash_and_rule_ties() -> None:
    """Backslash next to braces escapes once; earlier rules win ties."""

    assert escape("\\{}") == "\\textbackslash{}\\{\\}"
    rules = RuleSet.from_pairs([("a", "1"), ("ab", "2")])
    assert escape("ab", rules) == "1b"
