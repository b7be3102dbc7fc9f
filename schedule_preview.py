#!/usr/bin/env python3
import argparse
import os
import sys
from datetime import datetime, timezone
from buildtrigger.repositories import WorkflowRepository
from buildtrigger.utils.cron import CronSchedule
from buildtrigger.utils.logging import PACKAGE_LOGGER, setup_logger

ROOT_DIR = os.path.dirname(os.path.abspath(__file__))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Print the next scheduled builds")
    parser.add_argument('--count', type=int, default=5, help='Number of fire times per schedule')
    args = parser.parse_args(argv)
    setup_logger(PACKAGE_LOGGER)
    logger = setup_logger("SchedulePreview")
    try:
        workflow_file = os.environ.get("WORKFLOW_FILE", f"{ROOT_DIR}/.github/workflows/docker_build.yml")
        workflow = WorkflowRepository(workflow_file).load()
        if not workflow.triggers.schedules:
            logger.info(f"Workflow '{workflow.name}' has no schedule")
            return 0
        now = datetime.now(timezone.utc)
        for expression in workflow.triggers.schedules:
            schedule = CronSchedule(expression)
            moment = now
            print(f"{expression}:")
            for _ in range(args.count):
                moment = schedule.next_fire(moment)
                print(f"  {moment.isoformat()}")
        return 0
    except Exception as e:
        logger.error(f"Schedule preview failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
