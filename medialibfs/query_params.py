#!/usr/bin/env python3

from typing import Dict, Optional
from medialibfs.constants import ALL_ITEMS_TOKEN, CONTENT_MUSIC, FILTER_SLOTS, UNSET_ID
from medialibfs.errors import RegistryInconsistencyError
from medialibfs.node_types import NodeKind, kind_info
import logging


class DimensionFilterSet:
    """Dimension filters accumulated from a node's ancestor chain.

    Unset slots read as -1, which the backing store treats as "no filter".
    """

    def __init__(self, content: str = CONTENT_MUSIC):
        self.content = content
        self._values: Dict[str, int] = {}
        self._claims: Dict[str, NodeKind] = {}

    def get(self, slot: str) -> int:
        """Return the id stored for a slot, or -1 when unconstrained."""
        if slot not in FILTER_SLOTS:
            raise KeyError(slot)
        return self._values.get(slot, UNSET_ID)

    def is_set(self, slot: str) -> bool:
        return slot in self._values

    def as_dict(self) -> Dict[str, int]:
        """Return only the slots that carry a filter value."""
        return dict(self._values)

    def _claim(self, slot: str, kind: NodeKind) -> bool:
        """Record that ``kind`` owns ``slot``; False if a closer node already did."""
        owner = self._claims.get(slot)
        if owner is None:
            self._claims[slot] = kind
            return True
        if owner is not kind:
            raise RegistryInconsistencyError(
                f"Filter slot {slot!r} claimed by both {owner} and {kind}"
            )
        return False

    def _store(self, slot: str, value: int) -> None:
        self._values.setdefault(slot, value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DimensionFilterSet):
            return NotImplemented
        return self.content == other.content and self._values == other._values

    def __repr__(self) -> str:
        return f"DimensionFilterSet(content={self.content!r}, {self._values!r})"


class FilterCollector:
    """Collects dimension filters from a node and its ancestors."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger("MediaLibFS")

    def collect(self, node) -> DimensionFilterSet:
        """Walk from ``node`` to the root and gather every dimension value.

        The closest ancestor wins for each slot; a slot is never overwritten
        by a farther one. "-1" values claim their slot without constraining
        it.

        Args:
            node: The DirectoryNode to start from

        Returns:
            The accumulated DimensionFilterSet

        Raises:
            RegistryInconsistencyError: If two different dimension kinds in
                the chain map to the same slot
        """
        filters = DimensionFilterSet()
        content = None

        current = node
        while current is not None:
            info = kind_info(current.kind)
            if info is not None:
                if content is None and info.content:
                    content = info.content
                if info.slot and self._contributes(current):
                    if filters._claim(info.slot, current.kind):
                        if current.name != ALL_ITEMS_TOKEN:
                            filters._store(info.slot, int(current.name))
            current = current.parent

        if content:
            filters.content = content
        self.logger.debug(f"Collected filters for {node.kind.name}: {filters}")
        return filters

    @staticmethod
    def _contributes(node) -> bool:
        # Unselected dimension nodes have no value yet
        return bool(node.name)


def collect_filters(node) -> DimensionFilterSet:
    """Module-level shortcut for FilterCollector().collect(node)."""
    return FilterCollector().collect(node)
