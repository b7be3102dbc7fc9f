from buildtrigger.models import ImageReference

DEFAULT_REGISTRY = "docker.io"
DEFAULT_TAG = "latest"


def parse_image_reference(name: str) -> ImageReference:
    """Split an image name like ``ghcr.io/org/app:tag@sha256:...`` into its parts.

    Follows the docker convention: the first path segment is a registry only
    if it contains a ``.`` or ``:`` or is ``localhost``; a missing tag means
    ``latest``.
    """
    name = name.strip()
    if not name:
        raise ValueError("Empty image name")

    digest = None
    if "@" in name:
        name, digest = name.split("@", 1)

    tag = DEFAULT_TAG
    last_segment = name.rsplit("/", 1)[-1]
    if ":" in last_segment:
        name, tag = name.rsplit(":", 1)

    first, _, rest = name.partition("/")
    if rest and ("." in first or ":" in first or first == "localhost"):
        registry, repository = first, rest
    else:
        registry, repository = DEFAULT_REGISTRY, name
        if "/" not in repository:
            repository = f"library/{repository}"

    return ImageReference(registry=registry, repository=repository, tag=tag, digest=digest)


# registries whose v2 API is not served from the host in the image name
REGISTRY_API_HOSTS = {
    "docker.io": "registry-1.docker.io",
    "index.docker.io": "registry-1.docker.io",
}


def registry_api_url(registry: str) -> str:
    host = REGISTRY_API_HOSTS.get(registry, registry)
    scheme = "http" if host.startswith("localhost") else "https"
    return f"{scheme}://{host}"
