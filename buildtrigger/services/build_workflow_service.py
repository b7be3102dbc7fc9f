import json
import logging
import uuid
from dataclasses import asdict, replace
from datetime import datetime, timezone
from typing import override

from buildtrigger.clients.docker_client import DockerClient
from buildtrigger.models import Event, ImageReference, Run, RunMetadata, Workflow
from buildtrigger.repositories import RunRepository, WorkflowRepository
from buildtrigger.services.environment_preparer import EnvironmentPreparer
from buildtrigger.services.image_publisher import ImagePublisher
from buildtrigger.services.registry_authenticator import RegistryAuthenticator, RegistrySession
from buildtrigger.services.service import Service
from buildtrigger.services.trigger_evaluator import TriggerEvaluator
from buildtrigger.utils.logging import setup_logger
from buildtrigger.utils.secrets import resolve_secret


class BuildWorkflowService(Service):
    """Runs the workflow for one event.

    The stages run once, in order: prepare the build environment, log in to
    the registry, build and push. The first failing stage aborts the run.
    """

    def __init__(self, workflow_file: str, runs_file: str, event: Event, dry_run: bool = False, verify: bool = False):
        self.workflow_repo: WorkflowRepository = WorkflowRepository(workflow_file)
        self.runs_repo: RunRepository = RunRepository(runs_file)
        self.event: Event = event
        self.docker: DockerClient = DockerClient(dry_run=dry_run)
        self.dry_run: bool = dry_run
        self.verify: bool = verify
        self.logger: logging.Logger = setup_logger("BuildWorkflowService")

    @override
    def run(self) -> Run | None:
        workflow = self.workflow_repo.load()
        if not TriggerEvaluator(workflow.triggers).should_run(self.event):
            self.logger.info(f"Event {self.event.kind} does not trigger workflow '{workflow.name}'")
            return None

        run = Run(metadata=RunMetadata(
            id=self._generate_run_id(),
            started_at=datetime.now(timezone.utc),
            trigger=self.event.kind,
            status="pending",
        ))
        self.logger.info(f"Event {self.event.kind} triggers workflow '{workflow.name}', run {run.metadata.id}")
        self._record(run)

        try:
            images = self._execute(workflow)
        except Exception as e:
            self.logger.error(f"Run {run.metadata.id} failed: {e}")
            self._record(replace(run, metadata=replace(run.metadata, status="failed"), error=str(e)))
            raise

        finished = replace(run, metadata=replace(run.metadata, status="successful"), images=images)
        self._record(finished)
        if self.dry_run:
            print(json.dumps(asdict(finished), default=str, indent=2))
        self.logger.info(f"Run {run.metadata.id} completed successfully")
        return finished

    def _execute(self, workflow: Workflow) -> list[ImageReference]:
        builder = EnvironmentPreparer(workflow.environment, self.docker).prepare()

        authenticator = None
        session: RegistrySession | None = None
        if workflow.credentials is not None:
            authenticator = RegistryAuthenticator(workflow.credentials, self.docker)
            session = authenticator.authenticate()
        else:
            self.logger.info("No registry credentials declared, skipping login")

        try:
            publisher = ImagePublisher(
                self.docker,
                verify=self.verify and not self.dry_run,
                credentials=self._registry_credentials(workflow, session),
            )
            return publisher.publish(workflow.build, builder)
        finally:
            if authenticator is not None and session is not None:
                authenticator.logout(session)

    def _registry_credentials(self, workflow: Workflow, session: RegistrySession | None) -> dict[str, tuple[str, str]]:
        if not self.verify or self.dry_run or session is None or workflow.credentials is None:
            return {}
        return {session.registry: (session.username, resolve_secret(workflow.credentials.password))}

    def _record(self, run: Run) -> None:
        if self.dry_run:
            return
        if not self.runs_repo.save(run):
            raise Exception(f"Failed to save run {run.metadata.id}")

    def _generate_run_id(self) -> str:
        return f"{self.event.kind}-{datetime.now(timezone.utc):%Y%m%d%H%M%S}-{uuid.uuid4().hex[:8]}"
