#!/usr/bin/env python3
"""
PBXCLEAN CORE MODELS
--------------------
Defines the fundamental data structures used across the PbxClean engine.
These models represent the lowest level of project-descriptor abstraction.

Author: PbxClean Team
Date: 2026-10-17
"""

from dataclasses import dataclass
from enum import Enum


class SectionKind(str, Enum):
    """The three anchor constructs the transformer recognizes."""
    FILES = "files"
    CHILDREN = "children"
    SETTINGS = "buildSettings"

    @property
    def is_list(self) -> bool:
        return self in (SectionKind.FILES, SectionKind.CHILDREN)


class ResolvePolicy(str, Enum):
    """Which build version wins when merges leave several behind."""
    HIGHEST = "highest"
    LOWEST = "lowest"

    @classmethod
    def parse(cls, value: str) -> "ResolvePolicy":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(p.value for p in cls)
            raise ValueError(f"Unknown version policy '{value}' (expected one of: {choices})")


@dataclass(frozen=True)
class SectionFrame:
    """
    An open section, created when an opener line is matched.

    The closing marker is derived from the opener's own indentation so that
    a nested '};' at a deeper level never ends the outer block.
    """
    kind: SectionKind
    indent: str             # Leading whitespace captured from the opener
    line_no: int = 0        # 1-based position of the opener in the source

    @property
    def closer(self) -> str:
        suffix = ");" if self.kind.is_list else "};"
        return self.indent + suffix


@dataclass(frozen=True)
class VersionToken:
    """A build-version declaration found by the pre-scan."""
    line_no: int
    value: str              # Digits exactly as written, never reformatted
