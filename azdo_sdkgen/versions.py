"""
versions.py

Responsibility: order version-like labels (e.g. "7.1", "7.2-preview") so the
most recent stable release comes first.
"""

from __future__ import annotations

import re
from typing import Iterable, Sequence

DEFAULT_PRERELEASE_MARKERS: tuple[str, ...] = ("preview", "beta", "rc")

_NON_DIGITS = re.compile(r"[^0-9]+")


def is_stable(label: str, markers: Sequence[str] = DEFAULT_PRERELEASE_MARKERS) -> bool:
    lowered = label.lower()
    return not any(m.lower() in lowered for m in markers)


def version_tokens(label: str) -> tuple[int, ...]:
    return tuple(int(tok) for tok in _NON_DIGITS.split(label) if tok)


def _numeric_key(label: str, width: int) -> tuple[int, ...]:
    tokens = version_tokens(label)
    # Missing trailing tokens compare as zero.
    return tokens + (0,) * (width - len(tokens))


def rank_descending(
    labels: Iterable[str],
    markers: Sequence[str] = DEFAULT_PRERELEASE_MARKERS,
) -> list[str]:
    """
    Return `labels` ordered newest-first.

    Stable labels precede prerelease ones; within each group labels are
    compared by their numeric tokens, then by reverse string order on ties.
    """
    items = list(labels)
    if not items:
        return []
    width = max(len(version_tokens(label)) for label in items)

    # Two stable passes: reverse string order first, then the primary key.
    ordered = sorted(items, reverse=True)
    ordered.sort(key=lambda label: _numeric_key(label, width), reverse=True)
    ordered.sort(key=lambda label: not is_stable(label, markers))
    return ordered


def latest_version(
    labels: Iterable[str],
    markers: Sequence[str] = DEFAULT_PRERELEASE_MARKERS,
) -> str | None:
    ranked = rank_descending(labels, markers)
    return ranked[0] if ranked else None
