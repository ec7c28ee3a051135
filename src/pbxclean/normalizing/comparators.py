#!/usr/bin/env python3
"""
PBXCLEAN COMPARATORS - Entry Ordering
-------------------------------------
Pure ordering functions over raw member lines of a 'files' or 'children'
list. Every comparison works on the human-readable name found in the
member's inline comment, lower-cased.

    A1B2C3D4E5F6A7B8C9D0E1F2 /* AppDelegate.m in Sources */,   <- files
    A1B2C3D4E5F6A7B8C9D0E1F2 /* AppDelegate.m */,              <- children

Author: PbxClean Team
Date: 2026-10-17
"""

import re
from functools import cmp_to_key
from typing import Callable, FrozenSet, Iterable, Optional

from pbxclean.core.errors import MalformedEntryError, UnknownSectionKindError
from pbxclean.core.models import SectionKind

FILES_ENTRY_PATTERN = re.compile(r'^\s*[A-Z0-9]{24} /\* (.+?) in ')
CHILDREN_ENTRY_PATTERN = re.compile(r'^\s*[A-Z0-9]{24} /\* (.+?) \*/,\r?$')

# Generated aggregate sources: UnifiedSource1.cpp, UnifiedSource12-mm.mm ...
UNIFIED_SOURCE_PATTERN = re.compile(r'^unifiedsource(\d+)')

# A non-empty, dot-free suffix after the last '.'
EXTENSION_PATTERN = re.compile(r'\.[^.]+$')

DEFAULT_EXTENSIONLESS_FILES: FrozenSet[str] = frozenset({"podfile", "mintfile"})

Comparator = Callable[[str, str], int]

_ENTRY_PATTERNS = {
    SectionKind.FILES: FILES_ENTRY_PATTERN,
    SectionKind.CHILDREN: CHILDREN_ENTRY_PATTERN,
}


def _coerce_kind(kind) -> SectionKind:
    try:
        kind = SectionKind(kind)
    except ValueError:
        raise UnknownSectionKindError(kind)
    if not kind.is_list:
        raise UnknownSectionKindError(kind.value)
    return kind


def extract_entry_key(line: str, kind) -> Optional[str]:
    """Returns the lower-cased entry name, or None when the line is not a member."""
    match = _ENTRY_PATTERNS[_coerce_kind(kind)].match(line)
    if not match:
        return None
    return match.group(1).lower()


def require_entry_key(line: str, kind) -> str:
    key = extract_entry_key(line, kind)
    if key is None:
        raise MalformedEntryError(line, SectionKind(kind).value)
    return key


def normalize_names(names: Iterable[str]) -> FrozenSet[str]:
    return frozenset(n.strip().lower() for n in names if n and n.strip())


def is_file_name(name: str, extensionless: FrozenSet[str] = DEFAULT_EXTENSIONLESS_FILES) -> bool:
    """Known extensionless files (Podfile) or anything with a file extension."""
    lowered = name.lower()
    return lowered in extensionless or bool(EXTENSION_PATTERN.search(lowered))


def compare_strings(a: str, b: str) -> int:
    if a == b:
        return 0
    return 1 if a > b else -1


def compare_files(a: str, b: str) -> int:
    name_a = require_entry_key(a, SectionKind.FILES)
    name_b = require_entry_key(b, SectionKind.FILES)

    unified_a = UNIFIED_SOURCE_PATTERN.match(name_a)
    unified_b = UNIFIED_SOURCE_PATTERN.match(name_b)
    if unified_a and unified_b:
        # Suffixes compare as text: "10" sorts before "2".
        return compare_strings(unified_a.group(1), unified_b.group(1))

    return compare_strings(name_a, name_b)


def compare_children(a: str, b: str,
                     extensionless: FrozenSet[str] = DEFAULT_EXTENSIONLESS_FILES) -> int:
    name_a = require_entry_key(a, SectionKind.CHILDREN)
    name_b = require_entry_key(b, SectionKind.CHILDREN)

    a_is_file = is_file_name(name_a, extensionless)
    b_is_file = is_file_name(name_b, extensionless)

    # Directories on top
    if not a_is_file and b_is_file:
        return -1
    if a_is_file and not b_is_file:
        return 1
    return compare_strings(name_a, name_b)


def comparator_for(kind, extensionless: FrozenSet[str] = DEFAULT_EXTENSIONLESS_FILES) -> Comparator:
    kind = _coerce_kind(kind)
    if kind is SectionKind.FILES:
        return compare_files
    return lambda a, b: compare_children(a, b, extensionless)


def sort_key_for(kind, extensionless: FrozenSet[str] = DEFAULT_EXTENSIONLESS_FILES):
    return cmp_to_key(comparator_for(kind, extensionless))
