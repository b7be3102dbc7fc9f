from unittest.mock import MagicMock

from buildtrigger.models import EnvironmentSpec
from buildtrigger.services.environment_preparer import EnvironmentPreparer


def make_preparer(spec, builder="builder-1"):
    docker = MagicMock()
    docker.create_builder.return_value = builder
    preparer = EnvironmentPreparer(spec, docker)
    preparer.logger = MagicMock()
    return preparer, docker


def test_prepare_qemu_and_buildx():
    preparer, docker = make_preparer(EnvironmentSpec(qemu=True, buildx=True))
    assert preparer.prepare() == "builder-1"
    docker.install_binfmt.assert_called_once_with("tonistiigi/binfmt:latest", "all")
    docker.create_builder.assert_called_once_with(None, None)
    docker.bootstrap_builder.assert_called_once_with("builder-1")


def test_prepare_nothing():
    preparer, docker = make_preparer(EnvironmentSpec())
    assert preparer.prepare() is None
    docker.install_binfmt.assert_not_called()
    docker.create_builder.assert_not_called()


def test_prepare_named_builder():
    preparer, docker = make_preparer(EnvironmentSpec(buildx=True, builder_name="ci", buildx_driver="docker-container"), "ci")
    assert preparer.prepare() == "ci"
    docker.create_builder.assert_called_once_with("ci", "docker-container")


def test_prepare_dry_run_builder():
    preparer, docker = make_preparer(EnvironmentSpec(buildx=True), "")
    assert preparer.prepare() is None
    docker.bootstrap_builder.assert_not_called()
