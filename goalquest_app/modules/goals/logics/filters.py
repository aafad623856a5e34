"""
Stateless filtering and sorting of record lists for the goal views.
Pure functions, no database dependencies.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterable, List, Mapping

from ..constants import SORT_CHOICES, SORT_ORDER_CHOICES, STATUS_CHOICES, VIEW_CHOICES
from ..schemas import GoalRecord

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


@dataclass(frozen=True)
class GoalFilters:
    view: str = 'all'
    search: str = ''
    status: str = 'all'
    category: str = ''
    sort_by: str = 'created'
    sort_order: str = 'desc'

    @classmethod
    def from_mapping(cls, args: Mapping) -> 'GoalFilters':
        """Build filters from query arguments, rejecting unknown choices."""
        filters = cls(
            view=(args.get('view') or 'all').strip().lower(),
            search=(args.get('search') or '').strip(),
            status=(args.get('status') or 'all').strip().lower(),
            category=(args.get('category') or '').strip(),
            sort_by=(args.get('sort_by') or 'created').strip().lower(),
            sort_order=(args.get('sort_order') or 'desc').strip().lower(),
        )
        for name, choices in (
            ('view', VIEW_CHOICES),
            ('status', STATUS_CHOICES),
            ('sort_by', SORT_CHOICES),
            ('sort_order', SORT_ORDER_CHOICES),
        ):
            value = getattr(filters, name)
            if value not in choices:
                raise ValueError(f"Invalid {name} '{value}'; expected one of {', '.join(choices)}")
        return filters


def _matches(record: GoalRecord, filters: GoalFilters) -> bool:
    if filters.view == 'goals' and record.is_habit:
        return False
    if filters.view == 'habits' and not record.is_habit:
        return False

    if filters.status == 'active' and record.completed:
        return False
    if filters.status == 'completed' and not record.completed:
        return False

    if filters.category and (record.category or '') != filters.category:
        return False

    if filters.search:
        needle = filters.search.lower()
        haystack = f"{record.title} {record.description or ''}".lower()
        if needle not in haystack:
            return False
    return True


def _sort_key(sort_by: str):
    if sort_by == 'progress':
        return lambda r: r.progress_percent
    if sort_by == 'xp':
        return lambda r: r.xp_value
    if sort_by == 'deadline':
        return lambda r: r.deadline
    return lambda r: r.created_at or _EPOCH


def filter_records(records: Iterable[GoalRecord], filters: GoalFilters) -> List[GoalRecord]:
    """Apply the view/status/category/search filters, then sort."""
    matched = [record for record in records if _matches(record, filters)]
    reverse = filters.sort_order == 'desc'

    if filters.sort_by == 'deadline':
        # Records without a deadline always go last
        dated = [r for r in matched if r.deadline is not None]
        undated = [r for r in matched if r.deadline is None]
        return sorted(dated, key=_sort_key('deadline'), reverse=reverse) + undated

    return sorted(matched, key=_sort_key(filters.sort_by), reverse=reverse)


def categories(records: Iterable[GoalRecord]) -> List[str]:
    """Distinct non-empty categories in first-seen order."""
    seen = []
    for record in records:
        if record.category and record.category not in seen:
            seen.append(record.category)
    return seen
