import os
import shlex
import subprocess
import logging

logger = logging.getLogger(__name__)


class DockerClient:
    def __init__(self, executable: str = "docker", dry_run: bool = False):
        self.executable: str = executable
        self.dry_run: bool = dry_run

    def run(self, args: list[str], stdin: str | None = None) -> str:
        cmd = [self.executable, *args]
        if self.dry_run:
            logger.info(f"Dry run mode. Skipping: {shlex.join(cmd)}")
            return ""
        logger.debug(f"Running: {shlex.join(cmd)}")
        result = subprocess.run(cmd, check=False, env=os.environ, input=stdin, capture_output=True, text=True)
        if result.returncode != 0:
            command = " ".join(args[:2]) if args[0] == "buildx" else args[0]
            stderr = result.stderr.strip()
            logger.error(f"docker {command} failed with code {result.returncode}: {stderr}")
            reason = stderr.splitlines()[-1] if stderr else f"exit code {result.returncode}"
            raise RuntimeError(f"docker {command} failed: {reason}")
        return result.stdout

    def install_binfmt(self, image: str, platforms: str) -> None:
        self.run(["run", "--privileged", "--rm", image, "--install", platforms])

    def create_builder(self, name: str | None = None, driver: str | None = None) -> str:
        args = ["buildx", "create", "--use"]
        if name:
            args += ["--name", name]
        if driver:
            args += ["--driver", driver]
        # buildx prints the name of the builder it created
        return self.run(args).strip() or name or ""

    def bootstrap_builder(self, name: str) -> None:
        self.run(["buildx", "inspect", "--bootstrap", name])

    def login(self, registry: str, username: str, password: str) -> None:
        self.run(["login", registry, "--username", username, "--password-stdin"], stdin=password)

    def logout(self, registry: str) -> None:
        self.run(["logout", registry])

    def buildx_build(
        self,
        context: str,
        dockerfile: str,
        tags: list[str],
        metadata_file: str,
        platforms: list[str] | None = None,
        builder: str | None = None,
        push: bool = False,
    ) -> None:
        args = ["buildx", "build", "--file", dockerfile]
        for tag in tags:
            args += ["--tag", tag]
        if platforms:
            args += ["--platform", ",".join(platforms)]
        if builder:
            args += ["--builder", builder]
        if push:
            args.append("--push")
        args += ["--metadata-file", metadata_file, context]
        self.run(args)
