from pydantic.dataclasses import dataclass
from .trigger import TriggerCondition
from .environment import EnvironmentSpec
from .credential import CredentialPair
from .build_descriptor import BuildDescriptor

@dataclass(frozen=True)
class Workflow:
    name: str
    triggers: TriggerCondition
    environment: EnvironmentSpec
    credentials: CredentialPair | None
    build: BuildDescriptor
