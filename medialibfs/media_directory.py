#!/usr/bin/env python3

from dataclasses import dataclass
from typing import Optional, Tuple
from medialibfs.content import (
    ContentProducer,
    Failure,
    ListResult,
    content_kind,
)
from medialibfs.directory_node import DirectoryNode, parse_path
from medialibfs.errors import ParseError
from medialibfs.node_types import SONG_KINDS, NodeKind, kind_info
from medialibfs.query_params import DimensionFilterSet
import logging

FAILURE_INVALID_PATH = "invalid path"

# Filter slots that make up a composite directory label, in display order.
LABEL_SLOTS: Tuple[Tuple[str, str], ...] = (
    ("genre", "genres"),
    ("artist", "artists"),
    ("album", "albums"),
    ("country", "countries"),
    ("set", "sets"),
    ("tag", "tags"),
)


@dataclass
class DirectoryListing:
    label: str
    result: ListResult


class MediaDirectory:
    """String path front end over the parser and the content producer."""

    def __init__(
        self,
        producer: ContentProducer,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize the media directory.

        Args:
            producer: Content producer used for listings and labels
            logger: Optional logger instance
        """
        self.producer = producer
        self.logger = logger or logging.getLogger("MediaLibFS")

    def _parse(self, path: str) -> Optional[DirectoryNode]:
        try:
            return parse_path(path)
        except ParseError as e:
            self.logger.debug(str(e))
            return None

    def get_directory(self, path: str) -> DirectoryListing:
        """List a directory.

        Args:
            path: Full path including the origin

        Returns:
            DirectoryListing with the localized label of the directory and
            the listing result. Unparseable paths give a Failure result.
        """
        node = self._parse(path)
        if node is None:
            return DirectoryListing("", Failure(FAILURE_INVALID_PATH))

        result = self.producer.list_children(node)
        if isinstance(result, Failure):
            self.logger.warning(f"Listing {path} failed: {result.reason}")
        return DirectoryListing(self.producer.localized_name(node), result)

    def get_node(self, path: str) -> Optional[DirectoryNode]:
        return self._parse(path)

    def get_directory_type(self, path: str) -> NodeKind:
        node = self._parse(path)
        return node.kind if node is not None else NodeKind.NONE

    def get_directory_child_type(self, path: str) -> NodeKind:
        """Return the kind of the items a listing of ``path`` contains."""
        node = self._parse(path)
        return content_kind(node) if node is not None else NodeKind.NONE

    def get_directory_parent_type(self, path: str) -> NodeKind:
        node = self._parse(path)
        if node is None or node.parent is None:
            return NodeKind.NONE
        return node.parent.kind

    def exists(self, path: str) -> bool:
        node = self._parse(path)
        return node is not None and content_kind(node) is not NodeKind.NONE

    def is_all_item(self, path: str) -> bool:
        """True when the last value of ``path`` is the "-1" sentinel."""
        node = self._parse(path)
        return node is not None and node.is_all

    def is_artist_dir(self, path: str) -> bool:
        return self.get_directory_type(path) is NodeKind.ARTIST

    def contains_songs(self, path: str) -> bool:
        return self.get_directory_child_type(path) in SONG_KINDS

    def get_query_params(self, path: str) -> Optional[DimensionFilterSet]:
        node = self._parse(path)
        if node is None:
            return None
        return self.producer.collector.collect(node)

    def get_label(self, path: str) -> str:
        """Build a descriptive label such as "Rock / Queen / 1975".

        The label joins the names of the selected genre, artist, album,
        country, set and tag filters plus the year. When no filter is set,
        the category label of the listed kind is used instead.

        Args:
            path: Full path including the origin

        Returns:
            The label, "" for unparseable paths and the root
        """
        node = self._parse(path)
        if node is None:
            return ""

        filters = self.producer.collector.collect(node)
        parts = []
        for slot, item_type in LABEL_SLOTS:
            if filters.is_set(slot):
                label = self.producer.lookup_label(item_type, filters.get(slot))
                if label:
                    parts.append(label)
        if filters.is_set("year"):
            parts.append(str(filters.get("year")))

        if parts:
            return " / ".join(parts)

        info = kind_info(content_kind(node))
        if info is None or not info.label:
            return ""
        return self.producer.localizer.label_for(info.label)
