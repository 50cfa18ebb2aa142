"""Minimal reader for .gitconfig-style files.

Only what ghrelease needs: ``[section]`` headers and ``key = value`` pairs,
indented or not. Other lines (valueless boolean keys, continuations) are
skipped without leaving the section. Subsection headers such as
``[gitflow "prefix"]`` are kept verbatim as the section name. Include
directives and multi-line values are not supported.
"""

from __future__ import annotations

import re
from pathlib import Path

from .result import Err, Ok, Result

__all__ = ["GitConfig", "parse_gitconfig", "read_gitconfig"]

_SECTION_RE = re.compile(r"^\s*\[(.*)\]")
_VALUE_RE = re.compile(r"^\s*([A-Za-z][\w-]*)\s*=\s*(.*)$")
_COMMENT_RE = re.compile(r"^\s*[#;]")

GitConfig = dict[str, dict[str, str]]


def parse_gitconfig(text: str) -> GitConfig:
    config: GitConfig = {}
    section: str | None = None
    for line in text.splitlines():
        if not line.strip() or _COMMENT_RE.match(line):
            continue

        m = _VALUE_RE.match(line)
        if m is not None:
            if section is not None:
                config[section][m.group(1)] = m.group(2).rstrip()
            continue

        header = _SECTION_RE.match(line)
        if header is not None:
            section = header.group(1)
            config.setdefault(section, {})
    return config


def read_gitconfig(path: Path) -> Result[GitConfig, str]:
    """Read and parse a gitconfig file. A missing file is an empty config."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return Ok({})
    except (OSError, UnicodeDecodeError) as e:
        return Err(f"unable to read {path}: {e}")
    return Ok(parse_gitconfig(text))
