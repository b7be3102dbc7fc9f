import pytest
from buildtrigger.utils.path_filter import filter_paths, is_selected, matches

WORKFLOW_PATHS = [".github/workflows/docker_build.yml", "docker/**"]


@pytest.mark.parametrize("pattern,path,expected", [
    ("docker/**", "docker/Dockerfile", True),
    ("docker/**", "docker/scripts/entrypoint.sh", True),
    ("docker/**", "dockerfiles/Dockerfile", False),
    ("docker/*", "docker/scripts/entrypoint.sh", False),
    ("*.md", "README.md", True),
    ("*.md", "docs/README.md", False),
    ("**/*.md", "docs/README.md", True),
    ("**/*.md", "README.md", True),
    ("src/**/mod.rs", "src/mod.rs", True),
    ("file?.txt", "file1.txt", True),
    ("file?.txt", "file10.txt", False),
    ("v[0-9].txt", "v3.txt", True),
    (".github/workflows/docker_build.yml", ".github/workflows/docker_build.yml", True),
    (".github/workflows/docker_build.yml", ".github/workflows/ci.yml", False),
    ("./docker/**", "docker/Dockerfile", True),
])
def test_matches(pattern, path, expected):
    assert matches(pattern, path) is expected


def test_negated_pattern_unselects_earlier_match():
    patterns = ["docker/**", "!docker/**/*.md"]
    assert is_selected("docker/Dockerfile", patterns)
    assert not is_selected("docker/README.md", patterns)


def test_later_pattern_reselects():
    patterns = ["docker/**", "!docker/**/*.md", "docker/CHANGELOG.md"]
    assert is_selected("docker/CHANGELOG.md", patterns)


def test_filter_paths_unrelated():
    assert filter_paths(["src/main.rs", "README.md"], WORKFLOW_PATHS) == []


def test_filter_paths_selects_declared():
    changed = ["src/main.rs", "docker/Dockerfile", ".github/workflows/docker_build.yml"]
    assert filter_paths(changed, WORKFLOW_PATHS) == ["docker/Dockerfile", ".github/workflows/docker_build.yml"]


def test_filter_paths_ignore_only():
    assert filter_paths(["docs/a.md", "src/a.rs"], [], ["docs/**"]) == ["src/a.rs"]
