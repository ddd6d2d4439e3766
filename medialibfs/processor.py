#!/usr/bin/env python3

from typing import Any, Dict, List, Optional
from medialibfs.constants import PATH_SEPARATOR, RECORD_FILE_SUFFIX
from medialibfs.content import FolderItem
import json
import logging
import re


class RecordProcessor:
    """Turns listing results into filesystem entry names and file bodies."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """Initialize the RecordProcessor.

        Args:
            logger: Logger instance to use
        """
        self.logger = logger or logging.getLogger("MediaLibFS")

    def sanitize_filename(self, name: str) -> str:
        """Sanitize a string to be used as a filename.

        Args:
            name: The filename to sanitize.

        Returns:
            A sanitized filename with problematic characters replaced.
        """
        invalid_chars = ["/", "\\", ":", "*", "?", "<", ">", "|"]
        sanitized = "".join("-" if c in invalid_chars else c for c in name.strip())
        # Remove leading/trailing dots or multiple consecutive hyphens
        sanitized = re.sub(r"^\.+|\.+$", "", sanitized)
        sanitized = re.sub(r"-+", "-", sanitized)
        return sanitized

    def record_filename(self, record: Dict[str, Any]) -> str:
        """Return the file name of a record, e.g. "Bohemian Rhapsody [12].json"."""
        label = self.sanitize_filename(str(record.get("label") or "")) or "untitled"
        record_id = record.get("id")
        if record_id is None:
            return f"{label}{RECORD_FILE_SUFFIX}"
        return f"{label} [{record_id}]{RECORD_FILE_SUFFIX}"

    def render_record(self, record: Dict[str, Any]) -> bytes:
        return (json.dumps(record, indent=2, sort_keys=True, default=str) + "\n").encode(
            "utf-8"
        )

    def folder_entries(self, dir_path: str, folders: List[FolderItem]) -> List[str]:
        """Return the directory names folder items add below ``dir_path``.

        Each folder path is reduced to its first segment relative to the
        listed directory. Duplicates are dropped, order is kept.

        Args:
            dir_path: Canonical engine path of the listed directory
            folders: Folder items of the listing

        Returns:
            Entry names in listing order
        """
        entries = []
        seen = set()
        for folder in folders:
            if not folder.path.startswith(dir_path):
                self.logger.warning(f"Folder {folder.path} is not below {dir_path}")
                continue
            relative = folder.path[len(dir_path) :].strip(PATH_SEPARATOR)
            if not relative:
                continue
            name = relative.split(PATH_SEPARATOR, 1)[0]
            if name not in seen:
                seen.add(name)
                entries.append(name)
        return entries

    def find_record(
        self, records: List[Dict[str, Any]], filename: str
    ) -> Optional[Dict[str, Any]]:
        for record in records:
            if self.record_filename(record) == filename:
                return record
        return None
