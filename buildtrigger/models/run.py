from dataclasses import field
from pydantic.dataclasses import dataclass
from .run_metadata import RunMetadata
from .image_reference import ImageReference

@dataclass(frozen=True)
class Run:
    metadata: RunMetadata
    images: list[ImageReference] = field(default_factory=list)
    error: str | None = None
