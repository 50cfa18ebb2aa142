"""Runtime configuration for a ghrelease run.

Values come from the environment and from the user's ``~/.gitconfig``:

    [github]
        token = <personal access token>

Environment:
    EDITOR          editor command line (default: vim)
    GIT_DIR         git metadata directory holding the scratch message file
    GITHUB_TOKEN    overrides the gitconfig token
    GITHUB_API_URL  GitHub REST endpoint (default: https://api.github.com)
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from .gitconfig import read_gitconfig
from .result import Err, Ok, Result

__all__ = [
    "Config",
    "ConfigError",
    "DEFAULT_API_URL",
    "DEFAULT_EDITOR",
    "load_config",
]

DEFAULT_EDITOR = "vim"
DEFAULT_API_URL = "https://api.github.com"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when the configuration cannot be assembled."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class Config:
    token: str
    editor: str = DEFAULT_EDITOR
    git_dir: str | None = None
    api_url: str = DEFAULT_API_URL


def _gitconfig_path(env: Mapping[str, str]) -> Path:
    home = env.get("HOME")
    if home:
        return Path(home) / ".gitconfig"
    return Path.home() / ".gitconfig"


def load_config(
    env: Mapping[str, str] | None = None,
    *,
    gitconfig_path: Path | None = None,
) -> Result[Config, ConfigError]:
    """Build the run configuration.

    Args:
        env: Environment mapping (defaults to os.environ)
        gitconfig_path: Explicit gitconfig location (defaults to ~/.gitconfig)

    Returns:
        Ok(Config) on success, Err(ConfigError) when no token is available
        or the gitconfig file cannot be read.
    """
    env = os.environ if env is None else env
    path = gitconfig_path or _gitconfig_path(env)

    token = (env.get("GITHUB_TOKEN") or "").strip()
    if not token:
        parsed = read_gitconfig(path)
        if isinstance(parsed, Err):
            return Err(ConfigError(parsed.error, path=path))
        token = parsed.value.get("github", {}).get("token", "").strip()

    if not token:
        return Err(ConfigError("token not found in your gitconfig file", path=path))

    editor = (env.get("EDITOR") or "").strip() or DEFAULT_EDITOR
    api_url = (env.get("GITHUB_API_URL") or "").strip().rstrip("/") or DEFAULT_API_URL
    git_dir = env.get("GIT_DIR") or None

    return Ok(Config(token=token, editor=editor, git_dir=git_dir, api_url=api_url))
