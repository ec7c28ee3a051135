#!/usr/bin/env python3
"""
PBXCLEAN ENGINE - The Driver
----------------------------
Runs the normalization pipeline against project.pbxproj files on disk. It
owns file discovery, atomic persistence and the per-file report consumed
by the CLI.

The target file is only ever touched by a single os.replace() of a fully
written temp file. Any PbxCleanError raised while normalizing propagates
before that point, so the original stays byte-for-byte intact.

Author: PbxClean Team
Date: 2026-10-17
"""

import os
import shutil
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pbxclean.core.config import PbxCleanConfig
from pbxclean.core.errors import ExternalScanError
from pbxclean.core.models import ResolvePolicy
from pbxclean.normalizing.pipeline import NormalizationPipeline

# Setup standardized logging
logging.basicConfig(level=logging.WARNING)
logger = logging.getLogger("pbxclean.engine")

PROJECT_FILE_NAME = "project.pbxproj"
TEMP_SUFFIX = ".pbxclean.tmp"
BACKUP_SUFFIX = ".pbxclean.backup"


class ProjectEngine:
    """
    Normalizes Xcode project descriptors in place.
    """

    def __init__(self, config: Optional[PbxCleanConfig] = None):
        self.config = config or PbxCleanConfig()
        self.pipeline = NormalizationPipeline(self.config.extensionless_files)

    def discover(self, path: Union[str, Path]) -> List[Path]:
        """A file is used as-is; a directory is searched for project.pbxproj files."""
        target = Path(path).resolve()
        if target.is_file():
            return [target]
        if not target.is_dir():
            raise FileNotFoundError(f"Path missing: {target}")

        # Symlinks are skipped to avoid loops and double-processing
        return sorted(
            f for f in target.rglob(PROJECT_FILE_NAME)
            if f.is_file() and not f.is_symlink()
        )

    def normalize_file(self, path: Union[str, Path], dry_run: bool = False,
                       policy: Optional[ResolvePolicy] = None) -> Dict[str, Any]:
        """
        Normalizes a single file and returns a report dict.
        Raises PbxCleanError on malformed input; nothing is written then.
        """
        full_path = Path(path).resolve()
        policy = policy or self.config.resolve_version

        try:
            raw_text = self._read(full_path)
        except (OSError, UnicodeDecodeError) as e:
            raise ExternalScanError(f"Unable to read {full_path}: {e}")

        context = self.pipeline.run(raw_text, policy)
        changed = context.changed

        result = {
            "file_path": str(full_path),
            "status": self._derive_status(changed, dry_run),
            "changed": changed,
            "written": False,
            "backup_created": None,
            "versions_found": self.pipeline.scanner.distinct_values(),
            "resolved_version": context.resolved_version,
            "stats": context.stats,
            "original_content": raw_text,
            "normalized_content": context.normalized_text,
        }

        if dry_run or not changed:
            return result

        if self.config.create_backup:
            backup_path = self._create_unique_backup(full_path)
            shutil.copy2(full_path, backup_path)
            result["backup_created"] = str(backup_path)

        self._atomic_write(full_path, context.normalized_text)
        result["written"] = True
        logger.info(f"Normalized {full_path}")
        return result

    def generate_summary(self, reports: List[Dict[str, Any]]) -> Dict[str, Any]:
        total = len(reports)
        return {
            "total_files": total,
            "changed": sum(1 for r in reports if r.get("changed")),
            "written_to_disk": sum(1 for r in reports if r.get("written")),
            "backups_created": sum(1 for r in reports if r.get("backup_created")),
            "duplicates_removed": sum(r.get("stats", {}).get("duplicates_removed", 0) for r in reports),
            "version_lines_dropped": sum(r.get("stats", {}).get("version_lines_dropped", 0) for r in reports),
        }

    def _derive_status(self, changed: bool, dry: bool) -> str:
        if not changed: return "UNCHANGED"
        if dry: return "PREVIEW"
        return "NORMALIZED"

    def _read(self, path: Path) -> str:
        # newline='' keeps CRLF files byte-identical outside the sections we touch
        with open(path, 'r', encoding='utf-8', newline='') as f:
            return f.read()

    def _atomic_write(self, target_path: Path, content: str):
        if not os.access(target_path.parent, os.W_OK):
            raise PermissionError(f"No write access to {target_path.parent}")
        temp_file = target_path.with_name(target_path.name + TEMP_SUFFIX)
        try:
            with open(temp_file, 'w', encoding='utf-8', newline='') as f:
                f.write(content)
            shutil.copymode(target_path, temp_file)
            os.replace(temp_file, target_path)
        except OSError as e:
            if temp_file.exists(): temp_file.unlink()
            raise IOError(f"Atomic write failed: {str(e)}")

    def _create_unique_backup(self, target_path: Path) -> Path:
        backup_path = target_path.with_name(target_path.name + BACKUP_SUFFIX)
        counter = 1
        while backup_path.exists():
            backup_path = target_path.with_name(f"{target_path.name}-{counter}{BACKUP_SUFFIX}")
            counter += 1
        return backup_path
