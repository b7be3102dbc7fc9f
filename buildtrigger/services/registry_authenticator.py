import logging
from dataclasses import dataclass

from buildtrigger.clients.docker_client import DockerClient
from buildtrigger.models import CredentialPair
from buildtrigger.utils.logging import setup_logger
from buildtrigger.utils.secrets import resolve_secret, secret_name


@dataclass(frozen=True)
class RegistrySession:
    registry: str
    username: str


class RegistryAuthenticator:
    def __init__(self, credentials: CredentialPair, docker: DockerClient):
        self.credentials: CredentialPair = credentials
        self.docker: DockerClient = docker
        self.logger: logging.Logger = setup_logger("RegistryAuthenticator")

    def authenticate(self) -> RegistrySession:
        registry = self.credentials.registry
        if self.docker.dry_run:
            username = secret_name(self.credentials.username) or self.credentials.username
            self.logger.info(f"Dry run mode. Not resolving credentials for {registry}")
            return RegistrySession(registry=registry, username=username)

        username = resolve_secret(self.credentials.username)
        password = resolve_secret(self.credentials.password)
        if not username or not password:
            raise EnvironmentError(f"Missing username or password for registry {registry}")

        try:
            self.docker.login(registry, username, password)
        except Exception as e:
            raise Exception(f"Failed to log in to {registry}: {e}") from e
        self.logger.info(f"Logged in to {registry} as {username}")
        return RegistrySession(registry=registry, username=username)

    def logout(self, session: RegistrySession) -> None:
        try:
            self.docker.logout(session.registry)
            self.logger.info(f"Logged out from {session.registry}")
        except Exception as e:
            self.logger.warning(f"Failed to log out from {session.registry}: {e}")
