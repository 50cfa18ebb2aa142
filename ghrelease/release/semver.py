from __future__ import annotations

import re
from dataclasses import dataclass

from ghrelease.core.result import Err, Ok, Result
from ghrelease.release.errors import ReleaseError


TAG_PREFIX = "v"

_IDENT = r"(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)"
_SEMVER_RE = re.compile(
    r"^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    rf"(?:-({_IDENT}(?:\.{_IDENT})*))?"
    r"(?:\+([0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?$"
)


@dataclass(frozen=True, slots=True)
class SemVer:
    major: int
    minor: int
    patch: int
    prerelease: str | None = None
    build: str | None = None

    def bump_patch(self) -> SemVer:
        return SemVer(self.major, self.minor, self.patch + 1)

    def __str__(self) -> str:
        out = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            out += f"-{self.prerelease}"
        if self.build:
            out += f"+{self.build}"
        return out


def parse_semver(text: str) -> SemVer | None:
    m = _SEMVER_RE.match(text)
    if m is None:
        return None
    return SemVer(
        major=int(m.group(1)),
        minor=int(m.group(2)),
        patch=int(m.group(3)),
        prerelease=m.group(4),
        build=m.group(5),
    )


def next_version(tag: str, *, prefix: str = TAG_PREFIX) -> Result[str, ReleaseError]:
    """Suggest the tag following ``tag``: next patch, prefix kept, metadata dropped."""
    has_prefix = bool(prefix) and tag.startswith(prefix)
    raw = tag[len(prefix) :] if has_prefix else tag

    parsed = parse_semver(raw)
    if parsed is None:
        return Err(
            ReleaseError(
                kind="invalid_tag",
                message=f"last release tag is not a semantic version: {tag}",
                hint="expected [v]MAJOR.MINOR.PATCH",
            )
        )

    version = str(parsed.bump_patch())
    return Ok(f"{prefix}{version}" if has_prefix else version)
