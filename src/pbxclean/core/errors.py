#!/usr/bin/env python3
"""
PBXCLEAN ERRORS
---------------
Every condition here is fatal for the file being processed. Nothing is
written to the target once one of these is raised.
"""


class PbxCleanError(Exception):
    """Base class for all normalization failures."""


class MalformedEntryError(PbxCleanError):
    """A list member did not match its kind's entry pattern."""

    def __init__(self, line: str, kind: str):
        self.line = line
        self.kind = kind
        super().__init__(f"Unexpected line format in '{kind}' section: {line!r}")


class UnknownSectionKindError(PbxCleanError):
    """A list normalizer was asked to handle something other than files/children."""

    def __init__(self, kind):
        self.kind = kind
        super().__init__(f"Expected 'children' or 'files' section, got {kind!r}")


class ExternalScanError(PbxCleanError):
    """The version pre-scan could not produce usable tokens."""


class ConfigError(PbxCleanError):
    """The configuration file is unreadable or contains invalid values."""
