from dataclasses import field
from pydantic.dataclasses import dataclass

@dataclass(frozen=True)
class BuildDescriptor:
    context: str = "."
    file: str | None = None
    push: bool = False
    tags: list[str] = field(default_factory=list)
    platforms: list[str] = field(default_factory=list)

    @property
    def dockerfile(self) -> str:
        return self.file or f"{self.context.rstrip('/')}/Dockerfile"
