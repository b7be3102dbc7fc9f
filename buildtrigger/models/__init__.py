from .build_descriptor import BuildDescriptor
from .credential import CredentialPair
from .environment import EnvironmentSpec
from .event import Event
from .image_reference import ImageReference
from .run_metadata import RunMetadata
from .run import Run
from .trigger import PullRequestFilter, TriggerCondition
from .workflow import Workflow
from .wrappers import RunsFile

__all__ = [
    "BuildDescriptor",
    "CredentialPair",
    "EnvironmentSpec",
    "Event",
    "ImageReference",
    "RunMetadata",
    "Run",
    "PullRequestFilter",
    "TriggerCondition",
    "Workflow",
    "RunsFile",
]
