import json
import logging
import os
import tempfile
from dataclasses import replace

from buildtrigger.clients.docker_client import DockerClient
from buildtrigger.clients.image_registry_client import ImageRegistryClient
from buildtrigger.models import BuildDescriptor, ImageReference
from buildtrigger.utils.image_name import parse_image_reference, registry_api_url
from buildtrigger.utils.logging import setup_logger


class ImagePublisher:
    def __init__(
        self,
        docker: DockerClient,
        verify: bool = False,
        credentials: dict[str, tuple[str, str]] | None = None,
    ):
        self.docker: DockerClient = docker
        self.verify_push: bool = verify
        self.credentials: dict[str, tuple[str, str]] = credentials or {}
        self.logger: logging.Logger = setup_logger("ImagePublisher")

    def publish(self, descriptor: BuildDescriptor, builder: str | None = None) -> list[ImageReference]:
        images = [parse_image_reference(t) for t in descriptor.tags]
        tags = [f"{i.name}:{i.tag}" for i in images]

        with tempfile.TemporaryDirectory() as tmp:
            metadata_file = os.path.join(tmp, "metadata.json")
            self.logger.info(f"Building {descriptor.dockerfile} in context {descriptor.context}")
            self.docker.buildx_build(
                context=descriptor.context,
                dockerfile=descriptor.dockerfile,
                tags=tags,
                metadata_file=metadata_file,
                platforms=descriptor.platforms,
                builder=builder,
                push=descriptor.push,
            )
            digest = self._read_digest(metadata_file)

        if not descriptor.push:
            self.logger.info("Push disabled, image kept in the build cache")
            return []

        published = [replace(i, digest=digest) for i in images]
        for image in published:
            self.logger.info(f"Published {image}")
        if self.verify_push:
            self.verify(published)
        return published

    def verify(self, images: list[ImageReference]) -> None:
        for image in images:
            registry = self.registry_client(image.registry)
            if not registry.exists(image):
                raise Exception(f"Image {image} was not found in the registry after push")
            remote = registry.resolve_digest(image)
            if image.digest and remote and remote != image.digest:
                self.logger.warning(f"Registry digest {remote} differs from build digest {image.digest} for {image.name}")

    def registry_client(self, registry: str) -> ImageRegistryClient:
        # credentials only apply to the registry that was logged in to
        return ImageRegistryClient(registry_api_url(registry), auth=self.credentials.get(registry))

    def _read_digest(self, metadata_file: str) -> str | None:
        if not os.path.isfile(metadata_file):
            return None
        try:
            with open(metadata_file, "r") as f:
                return json.load(f).get("containerimage.digest")
        except Exception as e:
            raise Exception(f"Invalid build metadata: {e}") from e
