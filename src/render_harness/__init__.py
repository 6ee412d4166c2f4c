"""Fixture-driven test helpers for text renderers.

The helpers take the conversion function as an argument, so any
``str -> str`` renderer can be checked against recorded input/expected pairs
and stress-tested on every substring or prefix of its inputs.
"""

from render_harness.cases import Case, Failure, pair_cases, transform_links
from render_harness.runner import (
    assert_cases,
    assert_reference,
    is_short_mode,
    run_cases,
    run_reference,
)

__all__ = [
    "Case",
    "Failure",
    "assert_cases",
    "assert_reference",
    "is_short_mode",
    "pair_cases",
    "run_cases",
    "run_reference",
    "transform_links",
]
