import logging

from buildtrigger.clients.docker_client import DockerClient
from buildtrigger.models import EnvironmentSpec
from buildtrigger.utils.logging import setup_logger


class EnvironmentPreparer:
    def __init__(self, spec: EnvironmentSpec, docker: DockerClient):
        self.spec: EnvironmentSpec = spec
        self.docker: DockerClient = docker
        self.logger: logging.Logger = setup_logger("EnvironmentPreparer")

    def prepare(self) -> str | None:
        """Install emulators and create the buildx builder, returning its name."""
        if self.spec.qemu:
            self.logger.info(f"Installing QEMU emulators for {self.spec.qemu_platforms}")
            self.docker.install_binfmt(self.spec.qemu_image, self.spec.qemu_platforms)

        if not self.spec.buildx:
            self.logger.info("Buildx not requested, using the default builder")
            return None

        builder = self.docker.create_builder(self.spec.builder_name, self.spec.buildx_driver)
        if builder:
            self.docker.bootstrap_builder(builder)
        self.logger.info(f"Builder {builder or '<dry-run>'} is ready")
        return builder or None
