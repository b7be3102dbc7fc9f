from dataclasses import asdict
from pathlib import Path

from ruamel.yaml import YAML
from buildtrigger.models import Run
from buildtrigger.models.wrappers import RunsFile
from buildtrigger.utils.yaml_loader import get_yaml_instance

DEFAULT_MAX_RUNS = 100


class RunRepository:
    """Build history kept in a YAML file, newest run first.

    Only the latest ``max_runs`` runs are kept when the history is written.
    """

    def __init__(self, file_path: str, max_runs: int = DEFAULT_MAX_RUNS):
        self.path: Path = Path(file_path)
        self.max_runs: int = max_runs
        self.yaml: YAML = get_yaml_instance()

    def find_all(self) -> list[Run]:
        if not self.path.is_file():
            return []
        data = self.yaml.load(self.path)
        # an empty document is an empty history, like a missing file
        if data is None:
            return []
        try:
            return RunsFile(**data).runs
        except Exception as e:
            raise ValueError(f"Invalid runs file {self.path}: {e}") from e

    def find_by_id(self, id: str) -> Run | None:
        return next((r for r in self.find_all() if r.metadata.id == id), None)

    def save(self, run: Run) -> bool:
        runs = self.find_all()
        ids = [r.metadata.id for r in runs]
        if run.metadata.id in ids:
            runs[ids.index(run.metadata.id)] = run
        else:
            runs.insert(0, run)
        return self._write(runs[:self.max_runs])

    def update(self, run: Run) -> bool:
        return self.save(run)

    def _write(self, runs: list[Run]) -> bool:
        try:
            self.yaml.dump({"runs": [asdict(r) for r in runs]}, self.path)
            return True
        except Exception as e:
            raise Exception(f"Error writing runs file {self.path}: {e}") from e
