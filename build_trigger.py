#!/usr/bin/env python3
import argparse
import os
import sys
from buildtrigger.services.build_workflow_service import BuildWorkflowService
from buildtrigger.services.event_resolver import EventResolver
from buildtrigger.utils.logging import PACKAGE_LOGGER, setup_logger

ROOT_DIR = os.path.dirname(os.path.abspath(__file__))


def read_changed_files(path: str) -> list[str]:
    with open(path, "r") as f:
        return [line.strip() for line in f if line.strip()]


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Image Build Trigger")
    parser.add_argument('--event', choices=["pull_request", "workflow_dispatch", "schedule"],
                        help='Event kind, defaults to GITHUB_EVENT_NAME')
    parser.add_argument('--changed-path', action='append', default=[], help='Path changed by the pull request (repeatable)')
    parser.add_argument('--changed-files', help='File listing the changed paths, one per line')
    parser.add_argument('--cron', help='Cron expression of the schedule that fired')
    parser.add_argument('--pull-request', help='Pull request to fetch changed paths from, as OWNER/REPO#NUMBER')
    parser.add_argument('--verify', action='store_true', help='Check the pushed image in the registry')
    parser.add_argument('--dry-run', action='store_true', help='Run in dry-run mode without making any changes')
    args = parser.parse_args(argv)

    setup_logger(PACKAGE_LOGGER)
    logger = setup_logger("BuildTrigger")

    try:
        workflow_file = os.environ.get("WORKFLOW_FILE", f"{ROOT_DIR}/.github/workflows/docker_build.yml")
        runs_file = os.environ.get("RUNS_FILE", f"{ROOT_DIR}/build-runs.yaml")
        changed = list(args.changed_path)
        if args.changed_files:
            changed += read_changed_files(args.changed_files)

        event = EventResolver().resolve(args.event, changed, args.cron, args.pull_request)
        logger.info(f"Starting build trigger for {event.kind} with workflow file: {workflow_file}")
        service = BuildWorkflowService(workflow_file, runs_file, event, dry_run=args.dry_run, verify=args.verify)
        run = service.run()
        if run is None:
            logger.info("Build not triggered")
        else:
            logger.info(f"Build run {run.metadata.id} completed successfully")
        return 0
    except Exception as e:
        logger.error(f"Build run failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
