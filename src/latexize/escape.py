"""Single-scan LaTeX escaping.

The escaper walks the input once. At each position the first rule (in rule
set order) whose match literal starts there is replaced; text that a
replacement inserts is never scanned again. This keeps ``{`` -> ``\\{`` and
``\\`` -> ``\\textbackslash{}`` from escaping each other's output.

Non-ASCII characters outside the rule set can optionally be encoded with
``pylatexenc``.
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Callable, Dict, Iterable, Optional, Tuple, Union

from pylatexenc.latexencode import UnicodeToLatexEncoder

from latexize.rules import LATEX_RULES, ReplacementRule, RuleSet

RulesLike = Union[RuleSet, Iterable[ReplacementRule]]

@lru_cache(maxsize=1)
def _unicode_encoder() -> UnicodeToLatexEncoder:
    """Return the shared encoder for non-ASCII text no rule covers."""

    return UnicodeToLatexEncoder(
        non_ascii_only=True,
        replacement_latex_protection="braces",
        unknown_char_policy="keep",
    )


@lru_cache(maxsize=32)
def _compile(rules: Tuple[ReplacementRule, ...]) -> Tuple[re.Pattern, Dict[str, str]]:
    """Return the alternation pattern and replacement lookup for ``rules``."""

    lookup: Dict[str, str] = {}
    for rule in rules:
        # first rule for a given literal wins
        lookup.setdefault(rule.match, rule.replacement)
    pattern = re.compile("|".join(re.escape(rule.match) for rule in rules))
    return pattern, lookup


def _as_tuple(rules: RulesLike) -> Tuple[ReplacementRule, ...]:
    if isinstance(rules, RuleSet):
        return rules.rules
    return tuple(rules)


def _substitute(
    text: str,
    rules: Tuple[ReplacementRule, ...],
    gap: Optional[Callable[[str], str]] = None,
) -> str:
    """Apply ``rules`` to ``text`` in one scan, passing unmatched runs to ``gap``."""

    if not text or not rules:
        return gap(text) if gap is not None and text else text

    pattern, lookup = _compile(rules)
    if gap is None:
        return pattern.sub(lambda m: lookup[m.group(0)], text)

    pieces = []
    pos = 0
    for match in pattern.finditer(text):
        if match.start() > pos:
            pieces.append(gap(text[pos : match.start()]))
        pieces.append(lookup[match.group(0)])
        pos = match.end()
    if pos < len(text):
        pieces.append(gap(text[pos:]))
    return "".join(pieces)


def escape(text: str, rules: RulesLike = LATEX_RULES) -> str:
    """Replace every occurrence of each rule's match literal in ``text``.

    Parameters
    ----------
    text:
        Any string, including the empty string.
    rules:
        Ordered replacement rules. Defaults to :data:`LATEX_RULES`.

    Returns
    -------
    str
        ``text`` with each matched literal replaced by its rule's
        replacement. Characters not covered by ``rules`` are copied as-is.

    Notes
    -----
    The function is not idempotent: escaping ``"{"`` yields ``"\\{"`` and
    escaping that again yields ``"\\textbackslash{}\\{"``.
    """

    return _substitute(text, _as_tuple(rules))


def latexize(text: str) -> str:
    """Turn a field value into LaTeX code using the fixed LaTeX rule set."""

    return escape(text, LATEX_RULES)


def escape_latex(text: Optional[str], *, encode_unicode: bool = False) -> str:
    """Escape text for LaTeX, treating ``None`` as an empty string.

    Parameters
    ----------
    text:
        Input value. Non-string values are converted with ``str``.
    encode_unicode:
        When true, non-ASCII characters that no rule covers are encoded with
        ``pylatexenc`` (for example ``é`` becomes ``\\'e``). Characters in
        the rule set always use the rule's replacement.

    Returns
    -------
    str
        LaTeX-escaped text suitable for table cells and running text.
    """

    if text is None:
        return ""
    gap = _unicode_encoder().unicode_to_latex if encode_unicode else None
    return _substitute(str(text), LATEX_RULES.rules, gap)


__all__ = ["escape", "escape_latex", "latexize"]
