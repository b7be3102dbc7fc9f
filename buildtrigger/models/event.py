from dataclasses import field
from datetime import datetime
from pydantic.dataclasses import dataclass

PULL_REQUEST = "pull_request"
WORKFLOW_DISPATCH = "workflow_dispatch"
SCHEDULE = "schedule"

@dataclass(frozen=True)
class Event:
    kind: str #can be either pull_request, workflow_dispatch or schedule
    changed_paths: list[str] = field(default_factory=list)
    cron: str | None = None
    occurred_at: datetime | None = None
