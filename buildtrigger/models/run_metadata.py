from dataclasses import dataclass
from datetime import datetime

@dataclass(frozen=True)
class RunMetadata:
    id: str
    started_at: datetime
    trigger: str
    status: str #can be either failed, successful or pending
