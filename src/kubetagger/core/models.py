#!/usr/bin/env python3
"""
KUBETAGGER CORE MODELS
----------------------
Defines the fundamental data structures used across the KubeTagger engine:
the read-only pod snapshot coming from the kubelet and the tag records
handed to downstream tag storage.

Author: KubeTagger Team
Date: 2026-10-19
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class PodPayloadError(ValueError):
    """Raised when a kubelet payload cannot be interpreted as a pod list."""


class TagCardinality(Enum):
    """How many distinct values a tag may take across all entities."""

    LOW = "low"
    HIGH = "high"
    AUTO = "auto"


@dataclass
class OwnerReference:
    """A controller pointer from a pod to its owning resource."""
    kind: str
    name: str


@dataclass
class ContainerSpec:
    """Declared container (pod.spec.containers[])."""
    name: str
    image: str = ""


@dataclass
class ContainerStatus:
    """Running container (pod.status.containerStatuses[])."""
    name: str
    id: str = ""


@dataclass
class PodMetadata:
    name: str = ""
    namespace: str = ""
    uid: str = ""
    labels: Dict[str, str] = field(default_factory=dict)
    annotations: Dict[str, str] = field(default_factory=dict)
    owners: List[OwnerReference] = field(default_factory=list)


@dataclass
class Pod:
    """
    A single pod snapshot as reported by the kubelet /pods endpoint.

    Only the fields needed for tagging are kept; everything else in the
    payload is ignored.
    """
    metadata: PodMetadata
    spec_containers: List[ContainerSpec] = field(default_factory=list)
    status_containers: List[ContainerStatus] = field(default_factory=list)

    def owners(self) -> List[OwnerReference]:
        return self.metadata.owners

    @classmethod
    def from_dict(cls, raw: Any) -> "Pod":
        """
        Builds a Pod from its kubelet JSON representation.

        Raises:
            PodPayloadError: if the pod, its metadata, spec or status is not a mapping,
                or one of the container/owner lists is not a sequence.
        """
        if not isinstance(raw, dict):
            raise PodPayloadError(f"Pod entry must be a mapping, got {type(raw).__name__}")

        meta = raw.get("metadata")
        if not isinstance(meta, dict):
            raise PodPayloadError("Pod entry is missing a 'metadata' mapping")

        spec = _section(raw, "spec")
        status = _section(raw, "status")

        owners = [
            OwnerReference(
                kind=_as_str(o.get("kind")),
                name=_as_str(o.get("name")),
            )
            for o in _sequence(meta, "metadata.ownerReferences")
            if isinstance(o, dict)
        ]

        metadata = PodMetadata(
            name=_as_str(meta.get("name")),
            namespace=_as_str(meta.get("namespace")),
            uid=_as_str(meta.get("uid")),
            labels=_as_str_map(meta.get("labels")),
            annotations=_as_str_map(meta.get("annotations")),
            owners=owners,
        )

        spec_containers = [
            ContainerSpec(name=_as_str(c.get("name")), image=_as_str(c.get("image")))
            for c in _sequence(spec, "spec.containers")
            if isinstance(c, dict)
        ]
        status_containers = [
            ContainerStatus(
                name=_as_str(c.get("name")),
                id=_as_str(c.get("containerID")),
            )
            for c in _sequence(status, "status.containerStatuses")
            if isinstance(c, dict)
        ]

        return cls(
            metadata=metadata,
            spec_containers=spec_containers,
            status_containers=status_containers,
        )


@dataclass
class TagInfo:
    """
    The output record: tags for one entity (a pod or a container).
    """
    source: str                  # Collector identifier, e.g. 'kubelet'
    entity: str                  # kubernetes_pod://<uid> or a raw container id
    low_card_tags: List[str] = field(default_factory=list)
    high_card_tags: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source": self.source,
            "entity": self.entity,
            "low_card_tags": list(self.low_card_tags),
            "high_card_tags": list(self.high_card_tags),
        }


def parse_pod_list(payload: Any) -> List[Pod]:
    """
    Converts a decoded kubelet payload into Pods.

    Accepts a PodList mapping ({"items": [...]}) or a bare list of pods.
    An empty mapping or None yields no pods.
    """
    if payload is None:
        return []
    if isinstance(payload, dict):
        items: Optional[Any] = payload.get("items", [])
        if items is None:
            return []
    else:
        items = payload

    if not isinstance(items, list):
        raise PodPayloadError(f"Pod list must be a sequence, got {type(items).__name__}")

    return [Pod.from_dict(item) for item in items]


def _as_str(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _as_str_map(value: Any) -> Dict[str, str]:
    if not isinstance(value, dict):
        return {}
    return {str(k): _as_str(v) for k, v in value.items()}


def _section(raw: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = raw.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise PodPayloadError(f"Pod '{key}' must be a mapping, got {type(value).__name__}")
    return value


def _sequence(section: Dict[str, Any], path: str) -> List[Any]:
    value = section.get(path.rsplit(".", 1)[-1])
    if value is None:
        return []
    if not isinstance(value, list):
        raise PodPayloadError(f"Pod '{path}' must be a sequence, got {type(value).__name__}")
    return value
