#!/usr/bin/env python3
"""
PBXCLEAN SCANNER - Version Pre-Scan
-----------------------------------
Whole-file pass that collects every CURRENT_PROJECT_VERSION declaration
before the transformer starts. The transformer cannot decide which version
lines to keep until this pass has finished.

Author: PbxClean Team
Date: 2026-10-17
"""

import re
from typing import Iterable, List

from pbxclean.core.models import VersionToken

VERSION_KEY = "CURRENT_PROJECT_VERSION"
VERSION_PATTERN = re.compile(VERSION_KEY + r" = ([0-9]+)")


class VersionScanner:
    """
    Finds build-version tokens anywhere in the document, inside or outside
    buildSettings blocks, in source order.
    """

    PATTERN = VERSION_PATTERN

    def __init__(self):
        self.tokens: List[VersionToken] = []

    def scan(self, lines: Iterable[str]) -> List[VersionToken]:
        # Reset so a reused scanner never leaks tokens from a previous file
        self.tokens = []

        for i, line in enumerate(lines, 1):
            for match in self.PATTERN.finditer(line):
                self.tokens.append(VersionToken(line_no=i, value=match.group(1)))

        return self.tokens

    def distinct_values(self) -> List[str]:
        """Distinct values in first-seen order, for reporting."""
        seen = []
        for token in self.tokens:
            if token.value not in seen:
                seen.append(token.value)
        return seen
