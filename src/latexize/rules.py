"""Replacement rules used by the LaTeX escaper.

A rule pairs a literal match string with its literal replacement. Rules are
grouped into an ordered, immutable rule set; when two rules could match at
the same position the earlier one wins, so the order of ``LATEX_RULES`` is
part of its meaning.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Tuple


@dataclass(frozen=True)
class ReplacementRule:
    """Literal substitution of ``match`` by ``replacement``.

    Parameters
    ----------
    match:
        Non-empty literal to search for. It is never interpreted as a
        regular expression.
    replacement:
        Literal text emitted in place of each occurrence of ``match``.
    """

    match: str
    replacement: str

    def __post_init__(self) -> None:
        if not self.match:
            raise ValueError("ReplacementRule.match must be a non-empty string")


@dataclass(frozen=True)
class RuleSet:
    """Ordered, immutable sequence of :class:`ReplacementRule` objects."""

    rules: Tuple[ReplacementRule, ...]

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[str, str]]) -> "RuleSet":
        """Build a rule set from ``(match, replacement)`` pairs, keeping order."""

        return cls(tuple(ReplacementRule(match, repl) for match, repl in pairs))

    def __iter__(self) -> Iterator[ReplacementRule]:
        return iter(self.rules)

    def __len__(self) -> int:
        return len(self.rules)

    def matches(self) -> Tuple[str, ...]:
        """Return the match literals in rule order."""

        return tuple(rule.match for rule in self.rules)


# Braces and the backslash come first: a brace escape inserts a backslash and
# the backslash escape inserts braces, and neither may be escaped again.
LATEX_RULES = RuleSet.from_pairs(
    [
        ("{", "\\{"),
        ("}", "\\}"),
        ("\\", "\\textbackslash{}"),
        ("&", "\\&"),
        ("%", "\\%"),
        ("$", "\\$"),
        ("#", "\\#"),
        ("_", "\\_"),
        ("~", "\\textasciitilde{}"),
        ("^", "\\textasciicircum{}"),
        ("ß", "\\ss{}"),
    ]
)


__all__ = ["LATEX_RULES", "ReplacementRule", "RuleSet"]
