import logging
from datetime import datetime, timezone

from buildtrigger.models import Event, TriggerCondition
from buildtrigger.utils.cron import CronSchedule
from buildtrigger.utils.logging import setup_logger
from buildtrigger.utils.path_filter import filter_paths


class TriggerEvaluator:
    def __init__(self, triggers: TriggerCondition):
        self.triggers: TriggerCondition = triggers
        self.schedules: list[CronSchedule] = [CronSchedule(s) for s in triggers.schedules]
        self.logger: logging.Logger = setup_logger("TriggerEvaluator")

    def should_run(self, event: Event) -> bool:
        match event.kind:
            case "workflow_dispatch":
                return self.triggers.workflow_dispatch
            case "pull_request":
                return self._pull_request_matches(event)
            case "schedule":
                return self._schedule_matches(event)
            case _:
                self.logger.warning(f"Unsupported event kind: {event.kind}")
                return False

    def _pull_request_matches(self, event: Event) -> bool:
        pr_filter = self.triggers.pull_request
        if pr_filter is None:
            return False
        if not pr_filter.paths and not pr_filter.paths_ignore:
            return True
        matched = filter_paths(event.changed_paths, pr_filter.paths, pr_filter.paths_ignore)
        if matched:
            self.logger.info(f"Changed paths matching the filter: {', '.join(matched)}")
        else:
            self.logger.info(f"None of the {len(event.changed_paths)} changed paths matches the filter")
        return bool(matched)

    def _schedule_matches(self, event: Event) -> bool:
        if event.cron is not None:
            return event.cron.strip() in self.triggers.schedules
        moment = event.occurred_at or datetime.now(timezone.utc)
        return any(s.matches(moment) for s in self.schedules)

