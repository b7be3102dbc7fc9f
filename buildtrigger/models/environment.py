from pydantic.dataclasses import dataclass

@dataclass(frozen=True)
class EnvironmentSpec:
    qemu: bool = False
    qemu_image: str = "tonistiigi/binfmt:latest"
    qemu_platforms: str = "all"
    buildx: bool = False
    builder_name: str | None = None
    buildx_driver: str | None = None
