"""LaTeX escaping helpers for text pulled from project and document fields.

The package exposes a fixed, ordered rule table for LaTeX reserved
characters, a single-scan literal substitution that applies it, and small
utilities (CSV tables, a command line) built on top of the escaper.
"""

from latexize.escape import escape, escape_latex, latexize
from latexize.rules import LATEX_RULES, ReplacementRule, RuleSet

__all__ = [
    "LATEX_RULES",
    "ReplacementRule",
    "RuleSet",
    "escape",
    "escape_latex",
    "latexize",
]
