#!/usr/bin/env python3
"""
PBXCLEAN STREAM TRANSFORMER - Single-Pass State Machine
-------------------------------------------------------
Pulls lines one at a time and yields the normalized document. Three
anchor lines switch the machine out of SCANNING:

    files = (            -> COLLECTING_LIST  (files)
    children = (         -> COLLECTING_LIST  (children)
    buildSettings = {    -> FILTERING_SETTINGS

A section ends at the first line consisting of the opener's indentation
followed by ');' or '};' (trailing whitespace allowed). Everything outside
the sections, the openers and the closers themselves, is passed through
verbatim and in order.

Author: PbxClean Team
Date: 2026-10-17
"""

import re
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Optional

from pbxclean.core.models import SectionFrame, SectionKind
from pbxclean.normalizing.scanner import VERSION_PATTERN
from pbxclean.normalizing.section import SectionNormalizer

logger = logging.getLogger("pbxclean.transformer")


class TransformState(Enum):
    SCANNING = "scanning"
    COLLECTING_LIST = "collecting_list"
    FILTERING_SETTINGS = "filtering_settings"


@dataclass
class TransformStats:
    """Counters for one transform run."""
    sections: Dict[str, int] = field(default_factory=lambda: {k.value: 0 for k in SectionKind})
    duplicates_removed: int = 0
    version_lines_dropped: int = 0
    unterminated_sections: int = 0

    def as_dict(self) -> Dict[str, object]:
        return {
            "sections": dict(self.sections),
            "duplicates_removed": self.duplicates_removed,
            "version_lines_dropped": self.version_lines_dropped,
            "unterminated_sections": self.unterminated_sections,
        }


class StreamTransformer:
    # Checked in this order; the first match wins.
    OPENERS = [
        (SectionKind.FILES, re.compile(r'^(\s*)files = \(\s*$')),
        (SectionKind.CHILDREN, re.compile(r'^(\s*)children = \(\s*$')),
        (SectionKind.SETTINGS, re.compile(r'^(\s*)buildSettings = \{\s*$')),
    ]

    def __init__(self, normalizer: Optional[SectionNormalizer] = None):
        self.normalizer = normalizer or SectionNormalizer()
        self.state = TransformState.SCANNING
        self.stats = TransformStats()

    def match_opener(self, line: str, line_no: int = 0) -> Optional[SectionFrame]:
        for kind, pattern in self.OPENERS:
            match = pattern.match(line)
            if match:
                return SectionFrame(kind=kind, indent=match.group(1), line_no=line_no)
        return None

    @staticmethod
    def is_closer(line: str, frame: SectionFrame) -> bool:
        return re.match(f'^{re.escape(frame.closer)}\\s*$', line) is not None

    def transform(self, lines: Iterable[str], resolved_version: Optional[str] = None) -> Iterator[str]:
        """
        Yields output lines. With resolved_version None every version line
        is kept; otherwise each buildSettings block keeps at most the first
        line declaring exactly that version.
        """
        self.state = TransformState.SCANNING
        self.stats = TransformStats()
        wanted = int(resolved_version) if resolved_version is not None else None

        frame: Optional[SectionFrame] = None
        members: List[str] = []
        wrote_version = False

        for line_no, line in enumerate(lines, 1):
            if self.state is TransformState.SCANNING:
                yield line
                frame = self.match_opener(line, line_no)
                if frame is None:
                    continue
                self.stats.sections[frame.kind.value] += 1
                if frame.kind.is_list:
                    members = []
                    self.state = TransformState.COLLECTING_LIST
                else:
                    wrote_version = False
                    self.state = TransformState.FILTERING_SETTINGS

            elif self.state is TransformState.COLLECTING_LIST:
                if not self.is_closer(line, frame):
                    members.append(line)
                    continue
                yield from self._flush(members, frame)
                # The closer keeps its own trailing whitespace
                yield line
                frame = None
                self.state = TransformState.SCANNING

            else:
                if wanted is not None:
                    match = VERSION_PATTERN.search(line)
                    if match:
                        if int(match.group(1)) != wanted or wrote_version:
                            self.stats.version_lines_dropped += 1
                            logger.debug(f"Dropping line {line_no}: {line.strip()}")
                            continue
                        wrote_version = True

                yield line

                if self.is_closer(line, frame):
                    frame = None
                    self.state = TransformState.SCANNING

        if self.state is not TransformState.SCANNING:
            self.stats.unterminated_sections += 1
            logger.warning(f"Input ended inside '{frame.kind.value}' section opened on line {frame.line_no}")
            if self.state is TransformState.COLLECTING_LIST:
                yield from self._flush(members, frame)
            self.state = TransformState.SCANNING

    def _flush(self, members: List[str], frame: SectionFrame) -> List[str]:
        ordered, dropped = self.normalizer.normalize_with_count(members, frame.kind)
        self.stats.duplicates_removed += dropped
        return ordered
