from pydantic.dataclasses import dataclass

from buildtrigger.models.run import Run

@dataclass(frozen=True)
class RunsFile:
    runs: list[Run]
