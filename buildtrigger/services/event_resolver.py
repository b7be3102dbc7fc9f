import json
import logging
import os
import re
from datetime import datetime, timezone

from buildtrigger.clients.github_client import GitHubClient
from buildtrigger.models import Event
from buildtrigger.models.event import PULL_REQUEST, SCHEDULE
from buildtrigger.utils.logging import setup_logger

PULL_REQUEST_REF = re.compile(r"^(?P<repo>[\w.-]+/[\w.-]+)#(?P<number>\d+)$")


class EventResolver:
    """Builds an Event from CLI arguments, falling back to the GitHub Actions environment."""

    def __init__(self, github: GitHubClient | None = None):
        self.github: GitHubClient | None = github
        self.logger: logging.Logger = setup_logger("EventResolver")

    def resolve(
        self,
        kind: str | None = None,
        changed_paths: list[str] | None = None,
        cron: str | None = None,
        pull_request: str | None = None,
    ) -> Event:
        kind = kind or os.environ.get("GITHUB_EVENT_NAME")
        if not kind:
            raise ValueError("No event given and GITHUB_EVENT_NAME is not set")

        payload = self._event_payload()
        paths = list(changed_paths or [])
        if kind == PULL_REQUEST and not paths:
            repo, number = self._pull_request_ref(pull_request, payload)
            self.logger.info(f"Fetching changed files of {repo}#{number}")
            paths = self._github().get_pull_request_files(repo, number)

        if kind == SCHEDULE and cron is None:
            cron = payload.get("schedule")

        return Event(kind=kind, changed_paths=paths, cron=cron, occurred_at=datetime.now(timezone.utc))

    def _pull_request_ref(self, pull_request: str | None, payload: dict) -> tuple[str, int]:
        if pull_request:
            match = PULL_REQUEST_REF.match(pull_request)
            if not match:
                raise ValueError(f"Invalid pull request reference {pull_request}, expected OWNER/REPO#NUMBER")
            return match.group("repo"), int(match.group("number"))

        repo = os.environ.get("GITHUB_REPOSITORY")
        number = (payload.get("pull_request") or {}).get("number") or payload.get("number")
        if not repo or not number:
            raise ValueError("Cannot determine the pull request: pass --pull-request or --changed-path")
        return repo, int(number)

    def _event_payload(self) -> dict:
        path = os.environ.get("GITHUB_EVENT_PATH")
        if not path or not os.path.isfile(path):
            return {}
        with open(path, "r") as f:
            try:
                return json.load(f)
            except Exception as e:
                raise ValueError(f"Invalid event payload {path}: {e}") from e

    def _github(self) -> GitHubClient:
        if self.github is None:
            self.github = GitHubClient()
        return self.github
