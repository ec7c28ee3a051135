#!/usr/bin/env python3
"""
PBXCLEAN VERSION RESOLVER
-------------------------
Merges tend to leave several CURRENT_PROJECT_VERSION values behind. The
resolver picks the single value that will be kept everywhere the key recurs.

Author: PbxClean Team
Date: 2026-10-17
"""

import re
import logging
from typing import Iterable, List, Optional, Union

from pbxclean.core.errors import ExternalScanError
from pbxclean.core.models import ResolvePolicy, VersionToken

logger = logging.getLogger("pbxclean.resolver")

ASCII_DIGITS = re.compile(r"[0-9]+")


def parse_tokens(raw_values: Iterable[Union[str, VersionToken]]) -> List[str]:
    """Validates every token as a base-10 integer and returns the raw strings."""
    values = []
    for raw in raw_values:
        text = raw.value if isinstance(raw, VersionToken) else str(raw).strip()
        if not ASCII_DIGITS.fullmatch(text):
            raise ExternalScanError(f"Version pre-scan returned a non-numeric token: {text!r}")
        values.append(text)
    return values


def resolve_version(tokens: Iterable[Union[str, VersionToken]],
                    policy: ResolvePolicy = ResolvePolicy.HIGHEST) -> Optional[str]:
    """
    Returns the chosen token text, or None when no tokens exist.

    None switches version filtering off entirely: every version line
    passes through untouched.
    """
    values = sorted(parse_tokens(tokens), key=lambda v: int(v, 10))
    if not values:
        logger.info("No build version declarations found; version filtering disabled")
        return None

    policy = ResolvePolicy.parse(policy)
    chosen = values[0] if policy is ResolvePolicy.LOWEST else values[-1]
    if len(set(int(v) for v in values)) > 1:
        logger.info(f"Resolved {len(values)} build version declarations to {chosen} ({policy.value})")
    return chosen
