"""Run recorded cases and reference fixtures against a converter.

Besides checking each recorded input against its expected output, the
runner replays every contiguous substring of case inputs (and every prefix
of reference fixtures) through the converter. Those replays only look for
exceptions; their output is discarded. Set ``RENDER_HARNESS_SHORT=1`` to
skip them for quick runs.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable, Iterable, List, Optional

from render_harness.cases import Case, CasesLike, Failure, pair_cases

LOGGER = logging.getLogger(__name__)

SHORT_ENV_VAR = "RENDER_HARNESS_SHORT"
_TRUTHY = {"1", "true", "yes", "on"}

Converter = Callable[[str], str]


def is_short_mode() -> bool:
    """Return True when ``RENDER_HARNESS_SHORT`` asks for a quick run."""

    return os.environ.get(SHORT_ENV_VAR, "").strip().lower() in _TRUTHY


def _stress_enabled(stress: Optional[bool]) -> bool:
    if stress is None:
        return not is_short_mode()
    return stress


def _check(
    source: str, expected: str, convert: Converter, label: Optional[str] = None
) -> Optional[Failure]:
    """Run one conversion and return a Failure on mismatch or exception."""

    try:
        actual = convert(source)
    except Exception as exc:  # pylint: disable=broad-exception-caught
        return Failure(source, error=exc, label=label)
    if actual != expected:
        return Failure(source, expected=expected, actual=actual, label=label)
    return None


def _replay(candidates: Iterable[str], convert: Converter) -> Optional[Failure]:
    """Convert each candidate, stopping at and reporting the first exception."""

    for candidate in candidates:
        try:
            convert(candidate)
        except Exception as exc:  # pylint: disable=broad-exception-caught
            return Failure(candidate, error=exc)
    return None


def iter_substrings(text: str) -> Iterable[str]:
    """Yield ``text[start:end]`` for every ``0 <= start < end <= len(text)``."""

    for start in range(len(text)):
        for end in range(start + 1, len(text) + 1):
            yield text[start:end]


def iter_prefixes(text: str) -> Iterable[str]:
    """Yield every non-empty prefix of ``text``, shortest first."""

    for end in range(1, len(text) + 1):
        yield text[:end]


def run_cases(
    cases: CasesLike,
    convert: Converter,
    *,
    stress: Optional[bool] = None,
) -> List[Failure]:
    """Check ``convert`` against recorded cases.

    Parameters
    ----------
    cases:
        Flat alternating ``[input, expected, ...]`` list, :class:`Case`
        objects, or ``(input, expected)`` tuples.
    convert:
        Function under test.
    stress:
        Replay every substring of each input. ``None`` defers to
        :func:`is_short_mode`.

    Returns
    -------
    List[Failure]
        Mismatches and crashes in the order they were found. Converter
        exceptions are reported here and never propagate.
    """

    replay = _stress_enabled(stress)
    failures: List[Failure] = []
    for case in pair_cases(cases):
        failure = _check(case.source, case.expected, convert)
        if failure is not None:
            failures.append(failure)
        if replay:
            crash = _replay(iter_substrings(case.source), convert)
            if crash is not None:
                failures.append(crash)
    return failures


def load_reference(
    name: str,
    fixtures_dir: Path,
    *,
    input_suffix: str = ".text",
    expected_suffix: str = ".html",
) -> Case:
    """Read the ``<name><input_suffix>`` / ``<name><expected_suffix>`` pair.

    Raises
    ------
    OSError
        If either file cannot be read.
    """

    source = (fixtures_dir / (name + input_suffix)).read_text(encoding="utf-8")
    expected = (fixtures_dir / (name + expected_suffix)).read_text(encoding="utf-8")
    return Case(source, expected)


def run_reference(
    names: Iterable[str],
    convert: Converter,
    *,
    fixtures_dir: Path,
    input_suffix: str = ".text",
    expected_suffix: str = ".html",
    stress: Optional[bool] = None,
) -> List[Failure]:
    """Check ``convert`` against reference fixture files.

    Each name is loaded with :func:`load_reference`. A fixture that cannot be
    read is reported as a Failure and skipped. Unless in short mode, every
    prefix of each input is replayed as well.
    """

    replay = _stress_enabled(stress)
    failures: List[Failure] = []
    for name in names:
        label = name + input_suffix
        try:
            case = load_reference(
                name,
                Path(fixtures_dir),
                input_suffix=input_suffix,
                expected_suffix=expected_suffix,
            )
        except (OSError, UnicodeDecodeError) as exc:
            LOGGER.warning("Couldn't open fixture %s: %s", name, exc)
            failures.append(Failure("", error=exc, label=label))
            continue

        failure = _check(case.source, case.expected, convert, label=label)
        if failure is not None:
            failures.append(failure)
        if replay:
            crash = _replay(iter_prefixes(case.source), convert)
            if crash is not None:
                failures.append(crash)
    return failures


def _raise_failures(failures: List[Failure]) -> None:
    if failures:
        report = "".join(failure.describe() for failure in failures)
        raise AssertionError(f"{len(failures)} rendering failure(s):{report}")


def assert_cases(
    cases: CasesLike,
    convert: Converter,
    *,
    stress: Optional[bool] = None,
) -> None:
    """Run :func:`run_cases` and raise ``AssertionError`` listing all failures."""

    _raise_failures(run_cases(cases, convert, stress=stress))


def assert_reference(
    names: Iterable[str],
    convert: Converter,
    *,
    fixtures_dir: Path,
    input_suffix: str = ".text",
    expected_suffix: str = ".html",
    stress: Optional[bool] = None,
) -> None:
    """Run :func:`run_reference` and raise ``AssertionError`` on any failure."""

    _raise_failures(
        run_reference(
            names,
            convert,
            fixtures_dir=fixtures_dir,
            input_suffix=input_suffix,
            expected_suffix=expected_suffix,
            stress=stress,
        )
    )


__all__ = [
    "SHORT_ENV_VAR",
    "assert_cases",
    "assert_reference",
    "is_short_mode",
    "iter_prefixes",
    "iter_substrings",
    "load_reference",
    "run_cases",
    "run_reference",
]
