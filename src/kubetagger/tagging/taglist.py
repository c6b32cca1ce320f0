#!/usr/bin/env python3
"""
KUBETAGGER TAG LIST - The Accumulator
-------------------------------------
Per-entity scratch structure collecting tags under a cardinality class.
A pod's TagList is copied once per container so container tags inherit
the pod tags without leaking back into the pod record.

Author: KubeTagger Team
Date: 2026-10-19
"""

from typing import List, Tuple

from kubetagger.core.models import TagCardinality

# Tag keys starting with this prefix are high cardinality when added with add_auto
HIGH_CARD_PREFIX = "+"


class TagList:
    """
    Collects (key, value, cardinality) entries.

    Duplicates are kept as independent entries and only collapsed in compute().
    """

    def __init__(self):
        self._entries: List[Tuple[str, str, TagCardinality]] = []

    def __len__(self) -> int:
        return len(self._entries)

    def add(self, key: str, value: str, cardinality: TagCardinality):
        if cardinality is TagCardinality.AUTO:
            self.add_auto(key, value)
        else:
            self._entries.append((key, value, cardinality))

    def add_low(self, key: str, value: str):
        self._entries.append((key, value, TagCardinality.LOW))

    def add_high(self, key: str, value: str):
        self._entries.append((key, value, TagCardinality.HIGH))

    def add_auto(self, key: str, value: str):
        """
        Resolves the cardinality from the key naming convention:
        a leading '+' marks a high cardinality tag, anything else is low.
        Keys that resolve to an empty name are dropped.
        """
        if key.startswith(HIGH_CARD_PREFIX):
            key = key[len(HIGH_CARD_PREFIX):]
            if key:
                self.add_high(key, value)
            return
        if key:
            self.add_low(key, value)

    def copy(self) -> "TagList":
        """Returns an independent TagList with the same entries."""
        clone = TagList()
        # Entries are immutable tuples, a new list is enough to decouple them
        clone._entries = list(self._entries)
        return clone

    def compute(self) -> Tuple[List[str], List[str]]:
        """
        Serializes the entries as 'key:value' strings.

        Returns:
            (low cardinality tags, high cardinality tags), each deduplicated and sorted.
        """
        low = set()
        high = set()
        for key, value, cardinality in self._entries:
            tag = f"{key}:{value}"
            if cardinality is TagCardinality.HIGH:
                high.add(tag)
            else:
                low.add(tag)
        return sorted(low), sorted(high)
