"""Fuzzy filename matching for the open-file popup."""

from __future__ import annotations

import heapq
import os
from pathlib import Path

DEFAULT_SCAN_LIMIT = 5000
BOUNDARY_CHARS = "/_-. "


def to_relative_label(path: Path, root: Path) -> str:
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return path.as_posix()


def collect_files(
    root: Path, show_hidden: bool = False, limit: int = DEFAULT_SCAN_LIMIT
) -> list[str]:
    """Relative labels for the files below ``root``, sorted case-insensitively.

    The walk stops after ``limit`` files so a popup opened in a huge tree
    stays responsive.
    """

    root = root.resolve()
    labels: list[str] = []
    for dirpath, dirnames, filenames in os.walk(root):
        if not show_hidden:
            dirnames[:] = [name for name in dirnames if not name.startswith(".")]
            filenames = [name for name in filenames if not name.startswith(".")]
        dirnames.sort(key=str.lower)
        base = Path(dirpath)
        for filename in sorted(filenames, key=str.lower):
            labels.append(to_relative_label(base / filename, root))
            if len(labels) >= limit:
                return sorted(labels, key=str.casefold)
    return sorted(labels, key=str.casefold)


def fuzzy_score(query: str, candidate: str) -> int | None:
    if not query:
        return 0
    query_folded = query.casefold()
    candidate_folded = candidate.casefold()

    score = 0
    prev_idx = -1
    run = 0
    for needle in query_folded:
        idx = candidate_folded.find(needle, prev_idx + 1)
        if idx < 0:
            return None
        if idx == prev_idx + 1:
            run += 1
            score += 20 + min(16, run * 4)
        else:
            gap = idx - prev_idx - 1
            run = 0
            score -= min(40, gap * 2)
        if idx == 0 or candidate_folded[idx - 1] in BOUNDARY_CHARS:
            score += 35
        prev_idx = idx

    score -= len(candidate_folded) // 5
    return score


def fuzzy_match(query: str, labels: list[str], limit: int = 10) -> list[str]:
    """Best matches first: substring hits, then scattered subsequence hits."""

    max_results = max(1, limit)
    query = query.strip()
    if not query:
        return labels[:max_results]
    query_folded = query.casefold()

    substring_hits: list[tuple[int, int, str]] = []
    fuzzy_hits: list[tuple[int, int, str]] = []
    for label in labels:
        folded = label.casefold()
        match_idx = folded.find(query_folded)
        if match_idx >= 0:
            substring_hits.append((match_idx, len(label), label))
            continue
        score = fuzzy_score(query, label)
        if score is not None:
            fuzzy_hits.append((-score, len(label), label))

    ranked = heapq.nsmallest(max_results, substring_hits)
    if len(ranked) < max_results:
        ranked += heapq.nsmallest(max_results - len(ranked), fuzzy_hits)
    return [label for _, _, label in ranked]


__all__ = [
    "collect_files",
    "fuzzy_match",
    "fuzzy_score",
    "to_relative_label",
]
