"""
selection.py

Responsibility: pick exactly one spec document out of a directory listing.

Pure function over its inputs; the caller owns fetching the listing.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from azdo_sdkgen.errors import AmbiguousSelectionError, NotFoundError

DEFAULT_PREFERRED_PATTERNS: tuple[str, ...] = ("{key}.json", "{key}s.json")


def _describe(candidates: Iterable[str]) -> str:
    names = sorted(candidates)
    return ", ".join(names) if names else "(none)"


def select_spec_file(
    candidates: Iterable[str],
    key: str,
    override: str | None = None,
    patterns: Sequence[str] = DEFAULT_PREFERRED_PATTERNS,
) -> str:
    """
    Choose one file name from `candidates`.

    - An explicit `override` wins, but only if it is one of the candidates.
    - A single candidate is returned as-is.
    - Otherwise `patterns` (formatted with `key`) are tried in order; if none
      matches, refuse to guess.
    """
    names = set(candidates)

    if override:
        if override not in names:
            raise NotFoundError(f'--file "{override}" does not exist. Available: {_describe(names)}')
        return override

    if not names:
        raise NotFoundError("No JSON spec candidates in that directory.")
    if len(names) == 1:
        return next(iter(names))

    for pattern in patterns:
        preferred = pattern.format(key=key)
        if preferred in names:
            return preferred

    raise AmbiguousSelectionError(
        f"Several JSON specs found and none can be chosen safely. Use --file.\nAvailable: {_describe(names)}"
    )
