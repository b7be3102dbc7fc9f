import os
from typing import Any

from ruamel.yaml import YAML
from buildtrigger.models import (
    BuildDescriptor,
    CredentialPair,
    EnvironmentSpec,
    PullRequestFilter,
    TriggerCondition,
    Workflow,
)
from buildtrigger.utils.cron import CronSchedule
from buildtrigger.utils.yaml_loader import get_yaml_instance

BUILD_PUSH_ACTION = "docker/build-push-action"

DEFAULT_REGISTRY = "docker.io"


class WorkflowRepository:
    def __init__(self, file_path: str):
        self.file_path: str = file_path
        self.yaml: YAML = get_yaml_instance()

    def load(self) -> Workflow:
        if not os.path.isfile(self.file_path):
            raise ValueError(f"Invalid workflow file {self.file_path}: file not found")
        with open(self.file_path, "r") as f:
            data = self.yaml.load(f)
        try:
            return self._parse(data)
        except Exception as e:
            raise ValueError(f"Invalid workflow file {self.file_path}: {e}") from e

    def _parse(self, data: Any) -> Workflow:
        if not isinstance(data, dict):
            raise ValueError("top level must be a mapping")
        # YAML 1.1 loaders turn the bare "on" key into a boolean
        triggers = self._parse_triggers(data.get("on", data.get(True)))

        environment = EnvironmentSpec()
        credentials = None
        build = None
        for step in self._steps(data.get("jobs") or {}):
            action = str(step.get("uses", "")).split("@", 1)[0].strip()
            params = step.get("with") or {}
            match action:
                case "docker/setup-qemu-action":
                    environment = EnvironmentSpec(
                        qemu=True,
                        qemu_image=str(params.get("image", environment.qemu_image)),
                        qemu_platforms=str(params.get("platforms", environment.qemu_platforms)),
                        buildx=environment.buildx,
                        builder_name=environment.builder_name,
                        buildx_driver=environment.buildx_driver,
                    )
                case "docker/setup-buildx-action":
                    environment = EnvironmentSpec(
                        qemu=environment.qemu,
                        qemu_image=environment.qemu_image,
                        qemu_platforms=environment.qemu_platforms,
                        buildx=True,
                        builder_name=_as_optional(params.get("name")),
                        buildx_driver=_as_optional(params.get("driver")),
                    )
                case "docker/login-action":
                    credentials = CredentialPair(
                        registry=str(params.get("registry") or DEFAULT_REGISTRY),
                        username=str(params.get("username", "")),
                        password=str(params.get("password", "")),
                    )
                case "docker/build-push-action":
                    build = BuildDescriptor(
                        context=str(params.get("context", ".")),
                        file=_as_optional(params.get("file")),
                        push=_as_bool(params.get("push", False)),
                        tags=_as_list(params.get("tags")),
                        platforms=_as_list(params.get("platforms")),
                    )

        if build is None:
            raise ValueError(f"no {BUILD_PUSH_ACTION} step found")
        if build.push and not build.tags:
            raise ValueError("push requested without any tag")

        return Workflow(
            name=str(data.get("name") or os.path.basename(self.file_path)),
            triggers=triggers,
            environment=environment,
            credentials=credentials,
            build=build,
        )

    def _parse_triggers(self, on: Any) -> TriggerCondition:
        if on is None:
            raise ValueError("missing 'on' section")
        if isinstance(on, str):
            on = {on: None}
        elif isinstance(on, list):
            on = {str(name): None for name in on}
        elif not isinstance(on, dict):
            raise ValueError("'on' must be a string, a list or a mapping")

        pull_request = None
        if "pull_request" in on:
            pr = on.get("pull_request") or {}
            pull_request = PullRequestFilter(
                paths=_as_list(pr.get("paths")),
                paths_ignore=_as_list(pr.get("paths-ignore")),
            )

        schedules = []
        for entry in on.get("schedule") or []:
            expression = str(entry.get("cron", "")).strip()
            CronSchedule(expression)
            schedules.append(expression)

        return TriggerCondition(
            pull_request=pull_request,
            workflow_dispatch="workflow_dispatch" in on,
            schedules=schedules,
        )

    def _steps(self, jobs: dict) -> list[dict]:
        steps = []
        for job in jobs.values():
            steps.extend(s for s in (job or {}).get("steps") or [] if isinstance(s, dict))
        return steps


def _as_list(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [v.strip() for v in value.replace(",", "\n").splitlines() if v.strip()]
    return [str(v).strip() for v in value if str(v).strip()]


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return bool(value)


def _as_optional(value: Any) -> str | None:
    return str(value) if value else None
