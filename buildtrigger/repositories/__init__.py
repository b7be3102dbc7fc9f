from .run_repository import RunRepository
from .workflow_repository import WorkflowRepository

__all__ = [
    'RunRepository',
    'WorkflowRepository'
]
