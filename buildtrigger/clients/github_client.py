import os
import logging
from github import Auth, Github, GithubIntegration, Repository
logger = logging.getLogger(__name__)


class GitHubClient:
    def __init__(self):
        token = os.getenv("GITHUB_TOKEN")
        if token:
            self.client: Github = Github(auth=Auth.Token(token))
            return
        app_id = os.getenv("GITHUB_APP_ID")
        install_id = os.getenv("GITHUB_APP_INSTALLATION_ID")
        private_key = os.getenv("GITHUB_APP_PRIVATE_KEY")
        if not (app_id and install_id and private_key):
            logger.error("GITHUB_TOKEN or GitHub App credentials env vars are mandatory")
            raise EnvironmentError("Missing GitHub credentials")
        integration = GithubIntegration(int(app_id), private_key)
        token = integration.get_access_token(int(install_id)).token
        self.client = Github(auth=Auth.Token(token))

    def get_repo(self, full_name: str) -> Repository.Repository:
        return self.client.get_repo(full_name)

    def get_pull_request_files(self, full_name: str, number: int) -> list[str]:
        pull = self.get_repo(full_name).get_pull(number)
        files = []
        for f in pull.get_files():
            files.append(f.filename)
            # a rename touches both the old and the new location
            if f.previous_filename:
                files.append(f.previous_filename)
        return files
