"""Case and failure records for the rendering harness."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple, Union

_ANCHOR_RE = re.compile(r'<a href="/(.*?)"')
_IMG_RE = re.compile(r'<img src="/(.*?)"')


@dataclass(frozen=True)
class Case:
    """One recorded ``source`` and the output expected from rendering it."""

    source: str
    expected: str


@dataclass(frozen=True)
class Failure:
    """A mismatch or crash observed while running a converter.

    Parameters
    ----------
    source:
        The exact candidate handed to the converter (a full case input, a
        substring, or a prefix).
    expected:
        Expected output for mismatches; ``None`` for crashes.
    actual:
        Output produced for mismatches; ``None`` for crashes.
    error:
        Exception raised by the converter, if any.
    label:
        Optional name shown instead of ``source`` (for example a fixture
        file name).
    """

    source: str
    expected: Optional[str] = None
    actual: Optional[str] = None
    error: Optional[BaseException] = None
    label: Optional[str] = None

    @property
    def is_crash(self) -> bool:
        return self.error is not None

    def describe(self) -> str:
        """Return a multi-line report in the ``Input/Expected/Actual`` layout."""

        shown = self.label if self.label is not None else self.source
        if self.error is not None:
            return (
                f"\nerror while processing [{shown!r}]: "
                f"{type(self.error).__name__}: {self.error}"
            )
        return (
            f"\nInput   [{shown!r}]"
            f"\nExpected[{self.expected!r}]"
            f"\nActual  [{self.actual!r}]"
        )


CasesLike = Union[Sequence[str], Iterable[Case], Iterable[Tuple[str, str]]]


def pair_cases(cases: CasesLike) -> List[Case]:
    """Normalise ``cases`` into a list of :class:`Case` objects.

    Accepts a flat alternating sequence ``[input0, expected0, input1, ...]``
    (a trailing unpaired input is ignored), :class:`Case` objects, or
    ``(input, expected)`` tuples. Any other item in a non-string list raises
    ``TypeError``.
    """

    items = list(cases)
    if not items:
        return []
    if all(isinstance(item, str) for item in items):
        return [Case(items[i], items[i + 1]) for i in range(0, len(items) - 1, 2)]
    out: List[Case] = []
    for item in items:
        if isinstance(item, Case):
            out.append(item)
        elif isinstance(item, tuple) and len(item) == 2:
            source, expected = item
            out.append(Case(source, expected))
        else:
            raise TypeError(
                f"Expected a Case or (input, expected) pair, got {item!r}"
            )
    return out


def transform_links(cases: CasesLike, prefix: str) -> List[Case]:
    """Prefix root-relative links and images in each expected output.

    ``<a href="/x"`` becomes ``<a href="PREFIX/x"`` and ``<img src="/x"``
    becomes ``<img src="PREFIX/x"``. Inputs are left unchanged.
    """

    out: List[Case] = []
    for case in pair_cases(cases):
        expected = _ANCHOR_RE.sub(
            lambda m: f'<a href="{prefix}/{m.group(1)}"', case.expected
        )
        expected = _IMG_RE.sub(
            lambda m: f'<img src="{prefix}/{m.group(1)}"', expected
        )
        out.append(Case(case.source, expected))
    return out


__all__ = ["Case", "Failure", "pair_cases", "transform_links"]
