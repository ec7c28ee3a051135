#!/usr/bin/env python3
"""
PBXCLEAN SECTION NORMALIZER
---------------------------
Collapses duplicated member lines and puts one list section into
canonical order. Re-running it on its own output changes nothing.
"""

from typing import FrozenSet, Iterable, List, Tuple

from pbxclean.core.models import SectionKind
from pbxclean.normalizing.comparators import (
    DEFAULT_EXTENSIONLESS_FILES,
    require_entry_key,
    sort_key_for,
)


class SectionNormalizer:
    """Dedup + sort for 'files' and 'children' lists."""

    def __init__(self, extensionless: FrozenSet[str] = DEFAULT_EXTENSIONLESS_FILES):
        self.extensionless = extensionless

    def normalize(self, members: Iterable[str], kind) -> List[str]:
        return self.normalize_with_count(members, kind)[0]

    def normalize_with_count(self, members: Iterable[str], kind) -> Tuple[List[str], int]:
        """Returns the canonical members and how many duplicate lines were dropped."""
        # Resolves the comparator first so a bad kind fails even on empty input
        key = sort_key_for(kind, self.extensionless)
        kind = SectionKind(kind)

        members = list(members)
        # Raw text order settles entries the comparator treats as equal
        unique = sorted(set(members))

        # Extraction runs on every member so a lone malformed line still fails
        for line in unique:
            require_entry_key(line, kind)

        return sorted(unique, key=key), len(members) - len(unique)
