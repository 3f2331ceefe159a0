#!/usr/bin/env python3
"""
ADMONFENCE ENGINE - The High Orchestrator
-----------------------------------------
The ConversionEngine manages the lifecycle of a Markdown document through
discovery, conversion, verification and persistence. It ensures atomic
writes, unique backups and that one failing document never stops a batch.

Author: AdmonFence Team
Date: 2026-10-18
"""

import os
import shutil
import time
import logging
from pathlib import Path
from typing import Dict, Any, List, Optional, Callable

from admonfence.conversion.pipeline import ConversionPipeline
from admonfence.core.locator import list_documents
from admonfence.core.models import TypeMap
from admonfence.validator.validator import FenceValidator

# Setup standardized logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("admonfence.engine")

ADMONITION_SIGIL = "!!!"
BACKUP_SUFFIX = ".admonfence.backup"
TEMP_SUFFIX = ".admonfence.tmp"


class ConversionEngine:
    """
    Principal Orchestrator for admonition conversion.
    Maintains workspace state and coordinates the pipeline and validator
    with safety gates for atomic write operations.
    """

    def __init__(self, workspace_path: str, type_map: Optional[TypeMap] = None, backup: bool = True):
        self.workspace = Path(workspace_path).resolve()
        self.type_map = type_map or TypeMap()
        self.backup = backup

        self.pipeline = ConversionPipeline(self.type_map)
        self.validator = FenceValidator()

    def convert_file(self, relative_path: str, dry_run: bool = True,
                     force_write: bool = False) -> Dict[str, Any]:
        """
        Performs a full conversion cycle on a single document.
        """
        full_path = (self.workspace / relative_path).resolve()

        if not full_path.exists():
            return self._file_error(relative_path, "FILE_NOT_FOUND", f"Path missing: {full_path}")

        try:
            # Phase 1: Read (BOM-aware)
            raw_text = full_path.read_text(encoding='utf-8-sig')
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Error reading {relative_path}: {str(e)}")
            return self._file_error(relative_path, "READ_ERROR", str(e))

        result = {
            "file_path": str(relative_path),
            "success": True,
            "status": "SKIPPED",
            "modified": False,
            "written": False,
            "backup_created": None,
            "converted_content": None,
            "blocks_converted": 0,
            "max_depth": 0,
            "fallback_types": [],
            "validation_error": "",
        }

        # Fast path: nothing to convert
        if ADMONITION_SIGIL not in raw_text:
            return result

        # Phase 2: Transduction
        context = self.pipeline.run(raw_text)
        converted = context.converted_text
        is_modified = context.is_modified

        # Phase 3: Verification
        valid, validation_error = self.validator.validate(converted)

        result.update({
            "success": valid or not is_modified,
            "modified": is_modified,
            "converted_content": converted if is_modified else None,
            "blocks_converted": context.blocks_converted,
            "max_depth": context.max_depth,
            "fallback_types": list(context.fallback_types),
            "validation_error": validation_error,
            "status": self._derive_status(is_modified, dry_run, valid),
        })

        for token in sorted(set(context.fallback_types)):
            logger.warning(f"{relative_path}: unknown admonition type '{token}' mapped to '{self.type_map.default}'")

        if not is_modified:
            return result

        if dry_run:
            logger.info(f"[DRY RUN] Would convert admonitions in: {full_path.name}")
            return result

        if not valid and not force_write:
            logger.warning(f"Skipping write for {relative_path}: {validation_error}")
            return result

        # Phase 4: Execution (Disk I/O)
        if self.backup:
            backup_path = self._create_unique_backup(full_path)
            try:
                shutil.copy2(full_path, backup_path)
                result["backup_created"] = str(backup_path.relative_to(self.workspace))
            except OSError as e:
                result["backup_warning"] = f"Backup failed: {str(e)}"

        try:
            self._atomic_write(full_path, converted)
            result["written"] = True
            result["status"] = "CONVERTED"
            logger.info(f"[UPDATED] {full_path.name}")
        except IOError as e:
            logger.error(f"Error writing {relative_path}: {str(e)}")
            result["write_error"] = str(e)
            result["status"] = "WRITE_FAILED"
            result["success"] = False

        return result

    def scan_directory(self, extension: str = ".md", dry_run: bool = True,
                       force_write: bool = False,
                       progress_callback: Optional[Callable[[int, int], None]] = None) -> List[Dict[str, Any]]:
        """
        Recursively discovers and processes all documents under the workspace.
        """
        reports = []
        all_files = list_documents(self.workspace, extension)
        total_files = len(all_files)

        for processed, file_path in enumerate(all_files, 1):
            rel_path = str(file_path.relative_to(self.workspace))
            reports.append(self.convert_file(rel_path, dry_run=dry_run, force_write=force_write))

            if progress_callback:
                progress_callback(processed, total_files)

        return reports

    def generate_summary(self, reports: List[Dict[str, Any]]) -> Dict[str, Any]:
        """Aggregates per-document reports into run totals."""
        fallback_types = sorted({t for r in reports for t in r.get('fallback_types', [])})
        return {
            "total_files": len(reports),
            "changed": sum(1 for r in reports if r.get('modified', False)),
            "written_to_disk": sum(1 for r in reports if r.get('written', False)),
            "skipped": sum(1 for r in reports if r.get('status') == "SKIPPED"),
            "failed": sum(1 for r in reports if not r.get('success', False)),
            "backups_created": sum(1 for r in reports if r.get('backup_created') is not None),
            "blocks_converted": sum(r.get('blocks_converted', 0) for r in reports),
            "fallback_types": fallback_types,
            "summary_timestamp": time.strftime("%Y-%m-%d %H:%M:%S"),
        }

    def _derive_status(self, modified: bool, dry: bool, valid: bool) -> str:
        if not modified: return "UNCHANGED"
        if not valid: return "INVALID"
        if dry: return "PREVIEW"
        return "CONVERTED"

    def _atomic_write(self, target_path: Path, content: str):
        if not os.access(target_path.parent, os.W_OK):
            raise PermissionError(f"No write access to {target_path.parent}")
        temp_file = target_path.with_name(target_path.name + TEMP_SUFFIX)
        try:
            temp_file.write_text(content, encoding='utf-8')
            os.replace(temp_file, target_path)
        except OSError as e:
            if temp_file.exists(): temp_file.unlink()
            raise IOError(f"Atomic write failed: {str(e)}")

    def _create_unique_backup(self, target_path: Path) -> Path:
        backup_path = target_path.with_name(target_path.name + BACKUP_SUFFIX)
        counter = 1
        while backup_path.exists():
            backup_path = target_path.with_name(f"{target_path.stem}-{counter}{target_path.suffix}{BACKUP_SUFFIX}")
            counter += 1
        return backup_path

    def _file_error(self, path: str, status: str, error: str) -> Dict[str, Any]:
        return {
            "file_path": path, "status": status, "error": error,
            "success": False, "modified": False, "written": False,
            "backup_created": None, "fallback_types": [], "blocks_converted": 0,
        }
