#!/usr/bin/env python3
"""
KUBETAGGER EXPORTER
-------------------
Serializes tag records to YAML or JSON for hand-off to tag storage.

Author: KubeTagger Team
Date: 2026-10-19
"""

import io
import json
from typing import List

from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap, CommentedSeq

from kubetagger.core.models import TagInfo

SUPPORTED_FORMATS = ("yaml", "json")


class TagExporter:
    """
    Converts TagInfo records into a single document string.
    """

    def __init__(self):
        self.yaml = YAML(typ='rt')
        self.yaml.indent(mapping=2, sequence=4, offset=2)
        self.yaml.width = 4096
        self.preferred_order = ["source", "entity", "low_card_tags", "high_card_tags"]

    def _to_map(self, record: TagInfo) -> CommentedMap:
        data = record.to_dict()
        ordered = CommentedMap()
        for key in self.preferred_order:
            value = data[key]
            ordered[key] = CommentedSeq(value) if isinstance(value, list) else value
        return ordered

    def export(self, records: List[TagInfo], fmt: str = "yaml") -> str:
        """
        Exports records as a YAML sequence or a JSON array.

        Raises:
            ValueError: on an unsupported format.
        """
        if fmt == "json":
            return json.dumps([r.to_dict() for r in records], indent=2) + "\n"
        if fmt != "yaml":
            raise ValueError(f"Unsupported export format '{fmt}', expected one of {SUPPORTED_FORMATS}")

        stream = io.StringIO()
        self.yaml.dump(CommentedSeq([self._to_map(r) for r in records]), stream)
        return stream.getvalue()
