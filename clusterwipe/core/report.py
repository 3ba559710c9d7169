"""Report model returned by a teardown run."""
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Iterable, Iterator, List


class Action(str, Enum):
    DELETE = "delete"


class ActionStatus(str, Enum):
    EMPTY = ""
    IN_PROGRESS = "in_progress"
    DRY_RUN = "dry_run"
    SKIPPED = "skipped"
    COMPLETE = "complete"


@dataclass(frozen=True)
class ReportItem:
    """Outcome for a single resource that matched the cluster tags."""
    id: str
    name: str
    action: Action = Action.DELETE
    action_status: ActionStatus = ActionStatus.EMPTY

    def with_status(self, status: ActionStatus) -> "ReportItem":
        return replace(self, action_status=status)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "action": self.action.value,
            "action_status": self.action_status.value,
        }


@dataclass
class Report:
    """Ordered report items, engine order first and discovery order second."""
    items: List[ReportItem] = field(default_factory=list)

    def extend(self, items: Iterable[ReportItem]) -> None:
        self.items.extend(items)

    def __iter__(self) -> Iterator[ReportItem]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def to_dict(self) -> Dict[str, Any]:
        return {"items": [item.to_dict() for item in self.items]}
