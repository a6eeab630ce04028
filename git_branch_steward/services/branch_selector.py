"""Resolving a branch name typed by the user."""

import math
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple


@dataclass(frozen=True)
class SelectionCandidates:
    """What a typed branch name resolved to.

    `exact` is set when the name matched a branch verbatim. Otherwise
    `candidates` holds the fuzzy matches, or every known branch when nothing
    matched (`fuzzy` is False in that case).
    """
    query: str
    exact: Optional[str] = None
    candidates: List[str] = field(default_factory=list)
    fuzzy: bool = False

    @property
    def needs_choice(self) -> bool:
        return self.exact is None


@dataclass(frozen=True)
class PageView:
    """One page of an interactive selection list."""
    items: List[Tuple[int, str]]  # (index into the full list, name)
    page_index: int
    page_count: int
    total: int
    selected: Optional[int] = None

    @property
    def has_previous(self) -> bool:
        return self.page_index > 0

    @property
    def has_next(self) -> bool:
        return self.page_index < self.page_count - 1


def _unique(names: Iterable[str]) -> List[str]:
    seen = set()
    ordered = []
    for name in names:
        if name not in seen:
            seen.add(name)
            ordered.append(name)
    return ordered


def fuzzy_matches(query: str, names: Sequence[str], limit: int) -> List[str]:
    """Case-insensitive substring match in either direction, capped at limit."""
    needle = query.lower()
    matches = [name for name in names if needle in name.lower() or name.lower() in needle]
    return matches[:limit]


def resolve(
    query: str,
    local_branches: Sequence[str],
    remote_branches: Sequence[str],
    limit: int = 10,
) -> SelectionCandidates:
    """Resolve a typed name against local and remote branch names.

    Args:
        query: Name as typed by the user
        local_branches: Local branch names
        remote_branches: Remote branch names without the remote prefix
        limit: Maximum number of fuzzy matches offered
    """
    names = sorted(_unique(list(local_branches) + list(remote_branches)))
    if query in names:
        return SelectionCandidates(query=query, exact=query)

    matches = fuzzy_matches(query, names, limit) if query else []
    if matches:
        return SelectionCandidates(query=query, candidates=matches, fuzzy=True)
    return SelectionCandidates(query=query, candidates=names, fuzzy=False)


def paginate(
    candidates: Sequence[str],
    page_size: int,
    page_index: int = 0,
    selected: Optional[int] = None,
) -> PageView:
    """Cut one page out of a candidate list.

    Out-of-range page indexes are clamped; a selection outside the list is
    dropped.
    """
    if page_size <= 0:
        raise ValueError(f"page_size must be positive, got {page_size}")

    total = len(candidates)
    page_count = max(1, math.ceil(total / page_size))
    page_index = min(max(page_index, 0), page_count - 1)
    start = page_index * page_size
    items = [(i, candidates[i]) for i in range(start, min(start + page_size, total))]

    if selected is not None and not 0 <= selected < total:
        selected = None
    return PageView(
        items=items,
        page_index=page_index,
        page_count=page_count,
        total=total,
        selected=selected,
    )
