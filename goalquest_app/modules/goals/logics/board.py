"""
In-memory snapshot of one owner's records.

A board is never modified in place: every change returns a new board, so a
caller that still holds the previous board can fall back to it when the
store rejects a write.
"""
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from ..schemas import GoalRecord


class RecordNotOnBoard(KeyError):
    """The requested record id is not part of the snapshot."""


@dataclass(frozen=True)
class GoalBoard:
    owner_id: Optional[int]
    records: Tuple[GoalRecord, ...] = ()

    @classmethod
    def from_records(cls, owner_id: Optional[int], records: Iterable[GoalRecord]) -> 'GoalBoard':
        return cls(owner_id=owner_id, records=tuple(records))

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self):
        return iter(self.records)

    def __contains__(self, goal_id) -> bool:
        return any(record.id == goal_id for record in self.records)

    def get(self, goal_id: str) -> GoalRecord:
        for record in self.records:
            if record.id == goal_id:
                return record
        raise RecordNotOnBoard(goal_id)

    def replace(self, record: GoalRecord) -> 'GoalBoard':
        if record.id not in self:
            raise RecordNotOnBoard(record.id)
        return GoalBoard(
            owner_id=self.owner_id,
            records=tuple(record if r.id == record.id else r for r in self.records),
        )

    def add(self, record: GoalRecord) -> 'GoalBoard':
        # Newest first, matching the store's ordering
        return GoalBoard(owner_id=self.owner_id, records=(record,) + self.records)

    def remove(self, goal_id: str) -> 'GoalBoard':
        if goal_id not in self:
            raise RecordNotOnBoard(goal_id)
        return GoalBoard(
            owner_id=self.owner_id,
            records=tuple(r for r in self.records if r.id != goal_id),
        )
