import pytest
from buildtrigger.utils.image_name import parse_image_reference, registry_api_url


def test_fixed_tag_defaults_to_latest():
    image = parse_image_reference("ghcr.io/singularity-data/risingwave")
    assert image.registry == "ghcr.io"
    assert image.repository == "singularity-data/risingwave"
    assert image.tag == "latest"
    assert str(image) == "ghcr.io/singularity-data/risingwave:latest"


def test_explicit_tag_and_digest():
    image = parse_image_reference("ghcr.io/org/app:v1@sha256:abc")
    assert image.tag == "v1"
    assert image.digest == "sha256:abc"
    assert str(image) == "ghcr.io/org/app:v1@sha256:abc"


def test_registry_with_port():
    image = parse_image_reference("localhost:5000/app")
    assert image.registry == "localhost:5000"
    assert image.repository == "app"
    assert image.tag == "latest"


@pytest.mark.parametrize("name,repository", [
    ("ubuntu", "library/ubuntu"),
    ("org/app:1.0", "org/app"),
])
def test_docker_hub_defaults(name, repository):
    image = parse_image_reference(name)
    assert image.registry == "docker.io"
    assert image.repository == repository


def test_empty_name():
    with pytest.raises(ValueError):
        parse_image_reference("  ")


@pytest.mark.parametrize("registry,url", [
    ("ghcr.io", "https://ghcr.io"),
    ("quay.io", "https://quay.io"),
    ("docker.io", "https://registry-1.docker.io"),
    ("localhost:5000", "http://localhost:5000"),
])
def test_registry_api_url(registry, url):
    assert registry_api_url(registry) == url
