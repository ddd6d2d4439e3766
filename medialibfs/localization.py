#!/usr/bin/env python3

from typing import Dict, Optional
from medialibfs.constants import DEFAULT_STRINGS
import logging


class Localizer:
    """Resolves label keys into display strings."""

    def __init__(
        self,
        strings: Optional[Dict[str, str]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize the localizer.

        Args:
            strings: Label overrides applied on top of the English defaults
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger("MediaLibFS")
        self.strings = dict(DEFAULT_STRINGS)
        if strings:
            self.strings.update(strings)

    def label_for(self, key: str) -> str:
        """Return the display string for ``key``, or the key itself if unknown."""
        if not key:
            return ""
        label = self.strings.get(key)
        if label is None:
            self.logger.debug(f"No label for key {key!r}")
            return key
        return label
