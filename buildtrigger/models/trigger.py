from dataclasses import field
from pydantic.dataclasses import dataclass

@dataclass(frozen=True)
class PullRequestFilter:
    paths: list[str] = field(default_factory=list)
    paths_ignore: list[str] = field(default_factory=list)

@dataclass(frozen=True)
class TriggerCondition:
    pull_request: PullRequestFilter | None = None
    workflow_dispatch: bool = False
    schedules: list[str] = field(default_factory=list)
