from unittest.mock import MagicMock

import pytest
from buildtrigger.clients.github_client import GitHubClient

class DummyIntegration:
    def __init__(self, app_id, private_key):
        pass
    def get_access_token(self, installation_id):
        class Token:
            token = "fake-token"
        return Token()

@pytest.fixture(autouse=True)
def patch_integration(monkeypatch):
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)
    monkeypatch.setenv("GITHUB_APP_ID", "123")
    monkeypatch.setenv("GITHUB_APP_INSTALLATION_ID", "456")
    monkeypatch.setenv("GITHUB_APP_PRIVATE_KEY", "---KEY---")
    monkeypatch.setattr("buildtrigger.clients.github_client.GithubIntegration", DummyIntegration)
    yield

def test_github_client_get_repo(monkeypatch):
    client = GitHubClient()
    dummy = object()
    monkeypatch.setattr(client.client, "get_repo", lambda full_name: dummy)
    assert client.get_repo("org/repo") is dummy


def test_github_client_with_token(monkeypatch):
    monkeypatch.setenv("GITHUB_TOKEN", "ghp_token")
    monkeypatch.delenv("GITHUB_APP_ID")
    assert GitHubClient().client is not None


def test_missing_credentials(monkeypatch):
    monkeypatch.delenv("GITHUB_APP_ID", raising=False)
    with pytest.raises(EnvironmentError):
        GitHubClient()


def test_get_pull_request_files(monkeypatch):
    client = GitHubClient()
    renamed = MagicMock(filename="docker/Dockerfile", previous_filename="Dockerfile")
    changed = MagicMock(filename="src/main.rs", previous_filename=None)
    repo = MagicMock()
    repo.get_pull.return_value.get_files.return_value = [renamed, changed]
    monkeypatch.setattr(client.client, "get_repo", lambda full_name: repo)

    assert client.get_pull_request_files("org/repo", 7) == ["docker/Dockerfile", "Dockerfile", "src/main.rs"]
    repo.get_pull.assert_called_once_with(7)
