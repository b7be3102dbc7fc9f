import os
import re

SECRET_EXPRESSION = re.compile(r"^\$\{\{\s*secrets\.([A-Za-z_][A-Za-z0-9_]*)\s*\}\}$")


def secret_name(reference: str) -> str | None:
    match = SECRET_EXPRESSION.match(reference.strip())
    return match.group(1) if match else None


def resolve_secret(reference: str) -> str:
    # secrets are read from the environment, anything else is a literal
    name = secret_name(reference)
    if name is None:
        return reference
    value = os.environ.get(name)
    if not value:
        raise EnvironmentError(f"Secret {name} is not set")
    return value
