from pydantic.dataclasses import dataclass

@dataclass(frozen=True)
class CredentialPair:
    registry: str
    username: str
    password: str
