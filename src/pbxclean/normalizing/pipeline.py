#!/usr/bin/env python3
"""
PBXCLEAN NORMALIZATION PIPELINE
-------------------------------
Runs the phases in their required order:

    1. split     raw text -> lines
    2. pre-scan  every CURRENT_PROJECT_VERSION token in the file
    3. resolve   one version according to the policy
    4. transform single streaming pass over the same lines

The pre-scan must finish before the transform starts, because the
resolved version decides which version lines survive.

Author: PbxClean Team
Date: 2026-10-17
"""

import logging
from typing import FrozenSet, List, Optional

from pbxclean.core.models import ResolvePolicy
from pbxclean.normalizing.comparators import DEFAULT_EXTENSIONLESS_FILES
from pbxclean.normalizing.context import NormalizeContext
from pbxclean.normalizing.resolver import parse_tokens, resolve_version
from pbxclean.normalizing.scanner import VersionScanner
from pbxclean.normalizing.section import SectionNormalizer
from pbxclean.normalizing.transformer import StreamTransformer

logger = logging.getLogger("pbxclean.pipeline")


def split_lines(text: str) -> List[str]:
    """Splits on '\\n' only; a final newline does not produce an empty line."""
    if not text:
        return []
    lines = text.split("\n")
    if text.endswith("\n"):
        lines.pop()
    return lines


class NormalizationPipeline:

    def __init__(self, extensionless: FrozenSet[str] = DEFAULT_EXTENSIONLESS_FILES):
        self.scanner = VersionScanner()
        self.transformer = StreamTransformer(SectionNormalizer(extensionless))

    def run(self, input_text: str, policy: ResolvePolicy = ResolvePolicy.HIGHEST,
            resolved_version: Optional[str] = None) -> NormalizeContext:
        """
        Normalizes a whole document. Passing resolved_version skips the
        pre-scan and forces that value.
        """
        context = NormalizeContext(raw_text=input_text, lines=split_lines(input_text), policy=policy)

        context.tokens = self.scanner.scan(context.lines)
        if resolved_version is None:
            context.resolved_version = resolve_version(context.tokens, policy)
        else:
            context.resolved_version = parse_tokens([resolved_version])[0]

        # Materialized before anything is written so a failure leaves no partial output
        context.output_lines = list(self.transformer.transform(context.lines, context.resolved_version))
        context.stats = self.transformer.stats.as_dict()

        logger.debug(f"Transform stats: {context.stats}")
        return context
