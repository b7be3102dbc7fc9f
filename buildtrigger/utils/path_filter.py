"""Path filters with the same glob semantics as GitHub Actions ``paths``.

``*`` matches anything except ``/``, ``**`` matches anything including ``/``,
``?`` matches a single character and ``[...]`` a character class. Patterns
are evaluated in order and a leading ``!`` negates a pattern, so the last
matching pattern decides whether a path is selected.
"""
import re
from functools import lru_cache


@lru_cache(maxsize=256)
def compile_glob(pattern: str) -> re.Pattern[str]:
    regex = ""
    i = 0
    while i < len(pattern):
        c = pattern[i]
        if c == "*":
            if pattern.startswith("**", i):
                i += 2
                # "dir/**/x" must also match "dir/x"
                if pattern.startswith("/", i):
                    regex += "(?:.*/)?"
                    i += 1
                else:
                    regex += ".*"
                continue
            regex += "[^/]*"
        elif c == "?":
            regex += "[^/]"
        elif c == "[":
            end = pattern.find("]", i + 1)
            if end == -1:
                regex += re.escape(c)
            else:
                body = pattern[i + 1:end]
                if body.startswith("!"):
                    body = "^" + body[1:]
                regex += f"[{body}]"
                i = end
        else:
            regex += re.escape(c)
        i += 1
    return re.compile(f"^{regex}$")


def matches(pattern: str, path: str) -> bool:
    return compile_glob(pattern.removeprefix("./")).match(path.removeprefix("./")) is not None


def is_selected(path: str, patterns: list[str]) -> bool:
    selected = False
    for pattern in patterns:
        if pattern.startswith("!"):
            if selected and matches(pattern[1:], path):
                selected = False
        elif matches(pattern, path):
            selected = True
    return selected


def filter_paths(paths: list[str], include: list[str], exclude: list[str] | None = None) -> list[str]:
    selected = [p for p in paths if is_selected(p, include)] if include else list(paths)
    if exclude:
        selected = [p for p in selected if not is_selected(p, exclude)]
    return selected
