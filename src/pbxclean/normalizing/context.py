#!/usr/bin/env python3
"""
PBXCLEAN NORMALIZE CONTEXT
--------------------------
The record of a single normalization run. Initialized by the
NormalizationPipeline and enriched by the scanner, resolver and
transformer in that order.

Author: PbxClean Team
Date: 2026-10-17
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from pbxclean.core.models import ResolvePolicy, VersionToken


@dataclass
class NormalizeContext:
    raw_text: str                                   # Input exactly as read
    lines: List[str] = field(default_factory=list)  # Input split on '\n'
    policy: ResolvePolicy = ResolvePolicy.HIGHEST
    tokens: List[VersionToken] = field(default_factory=list)
    resolved_version: Optional[str] = None          # None disables version filtering
    output_lines: List[str] = field(default_factory=list)
    stats: Dict[str, Any] = field(default_factory=dict)

    @property
    def normalized_text(self) -> str:
        if not self.output_lines:
            return ""
        # Every emitted line is newline-terminated
        return "\n".join(self.output_lines) + "\n"

    @property
    def changed(self) -> bool:
        return self.normalized_text != self.raw_text
