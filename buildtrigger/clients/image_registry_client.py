import re
import requests
import logging

from buildtrigger.models import ImageReference

logger = logging.getLogger(__name__)

MANIFEST_TYPES = ", ".join([
    "application/vnd.oci.image.index.v1+json",
    "application/vnd.oci.image.manifest.v1+json",
    "application/vnd.docker.distribution.manifest.list.v2+json",
    "application/vnd.docker.distribution.manifest.v2+json",
])

CHALLENGE_PARAM = re.compile(r'(\w+)="([^"]*)"')


class ImageRegistryClient:
    def __init__(self, registry_url: str, auth: tuple[str, str] | None = None):
        self.registry_url: str = registry_url.rstrip("/")
        self.auth: tuple[str, str] | None = auth

    def _head_manifest(self, image: ImageReference) -> requests.Response:
        url = f"{self.registry_url}/v2/{image.repository}/manifests/{image.tag}"
        headers = {"Accept": MANIFEST_TYPES}
        response = requests.head(url=url, headers=headers, timeout=5)
        if response.status_code != 401:
            return response
        token = self._token(response.headers.get("WWW-Authenticate", ""), image.repository)
        if token is None:
            return response
        headers["Authorization"] = f"Bearer {token}"
        return requests.head(url=url, headers=headers, timeout=5)

    def _token(self, challenge: str, repository: str) -> str | None:
        # registries answer with: Bearer realm="...",service="...",scope="..."
        if not challenge.lower().startswith("bearer "):
            return None
        params = dict(CHALLENGE_PARAM.findall(challenge))
        realm = params.pop("realm", None)
        if not realm:
            return None
        params.setdefault("scope", f"repository:{repository}:pull")
        try:
            response = requests.get(url=realm, params=params, auth=self.auth, timeout=5)
            if response.status_code == 200:
                payload = response.json()
                return payload.get("token") or payload.get("access_token")
            logger.warning(f"Token request for {repository} returned status code {response.status_code}")
        except Exception as e:
            logger.warning(f"Could not obtain registry token for {repository}: {e}")
        return None

    def exists(self, image: ImageReference) -> bool:
        try:
            return self._head_manifest(image).status_code == 200
        except Exception as e:
            logger.error(f"Error checking image {image} existence: {e}")
            return False

    def resolve_digest(self, image: ImageReference) -> str | None:
        try:
            response = self._head_manifest(image)
            if response.status_code == 200:
                digest = response.headers.get("Docker-Content-Digest")
                if digest:
                    return digest
                else:
                    logger.warning(f"No digest found in headers for {image}")
            else:
                logger.warning(f"Failed to resolve digest: {image} (status code {response.status_code})")
        except Exception as e:
            logger.error(f"Error resolving digest for {image}: {e}")
        return None
