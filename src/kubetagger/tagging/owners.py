#!/usr/bin/env python3
"""
KUBETAGGER OWNER RESOLVER
-------------------------
Maps a pod's owner references to tags. The set of recognized controller
kinds is closed; anything else is reported and ignored.

ReplicaSets get special treatment: when the name looks generated by a
Deployment controller, the Deployment name is recovered from it.

Author: KubeTagger Team
Date: 2026-10-19
"""

from enum import Enum
from typing import Dict, List, Optional, Tuple

from kubetagger.core.models import OwnerReference, TagCardinality

# Characters used by the apimachinery random suffix generator (no vowels, no 0/1/3)
KUBE_ALLOWED_ENCODE_STRING_ALPHANUMS = "bcdfghjklmnpqrstvwxz2456789"

# ReplicaSets created by Kubernetes < 1.8 use a numeric hash suffix
DIGITS = "1234567890"

# Shorter suffixes are considered hand-written
MIN_GENERATED_SUFFIX_LEN = 3

OwnerTag = Tuple[str, str, TagCardinality]


class OwnerKind(Enum):
    """Controller kinds that contribute tags."""

    NONE = ""
    DEPLOYMENT = "Deployment"
    DAEMON_SET = "DaemonSet"
    REPLICATION_CONTROLLER = "ReplicationController"
    STATEFUL_SET = "StatefulSet"
    JOB = "Job"
    REPLICA_SET = "ReplicaSet"

    @classmethod
    def parse(cls, kind: str) -> Optional["OwnerKind"]:
        """Returns the matching kind, or None when the kind is not recognized."""
        try:
            return cls(kind)
        except ValueError:
            return None


# Direct kind -> (tag key, cardinality). NONE and REPLICA_SET are handled in resolve_owner_tags.
OWNER_TAG_POLICY: Dict[OwnerKind, Tuple[str, TagCardinality]] = {
    OwnerKind.DEPLOYMENT: ("kube_deployment", TagCardinality.LOW),
    OwnerKind.DAEMON_SET: ("kube_daemon_set", TagCardinality.LOW),
    OwnerKind.REPLICATION_CONTROLLER: ("kube_replication_controller", TagCardinality.LOW),
    OwnerKind.STATEFUL_SET: ("kube_stateful_set", TagCardinality.LOW),
    # TODO: detect jobs not spawned by a CronJob and tag them as low cardinality
    OwnerKind.JOB: ("kube_job", TagCardinality.HIGH),
}


def _in_runeset(value: str, runeset: str) -> bool:
    return all(char in runeset for char in value)


def parse_deployment_for_replicaset(name: str) -> str:
    """
    Gets the deployment name from a replicaset name, or returns an empty
    string if no parent deployment is found.

    This is a heuristic on the name alone: a hand-named ReplicaSet ending in
    '-' plus three or more characters from either accepted alphabet is taken
    for a generated one, and a generated suffix using other characters is not
    recognized.
    """
    last_dash = name.rfind("-")
    if last_dash == -1:
        return ""

    suffix = name[last_dash + 1:]
    if len(suffix) < MIN_GENERATED_SUFFIX_LEN:
        return ""

    if not _in_runeset(suffix, DIGITS) and not _in_runeset(suffix, KUBE_ALLOWED_ENCODE_STRING_ALPHANUMS):
        return ""

    return name[:last_dash]


def resolve_owner_tags(owner: OwnerReference) -> Optional[List[OwnerTag]]:
    """
    Resolves the tags contributed by a single owner reference.

    Returns:
        A (possibly empty) list of (key, value, cardinality) triples, or None
        when the owner kind is not recognized.
    """
    kind = OwnerKind.parse(owner.kind)
    if kind is None:
        return None

    if kind is OwnerKind.NONE:
        return []

    if kind is OwnerKind.REPLICA_SET:
        deployment = parse_deployment_for_replicaset(owner.name)
        if deployment:
            return [
                ("kube_replica_set", owner.name, TagCardinality.HIGH),
                ("kube_deployment", deployment, TagCardinality.LOW),
            ]
        return [("kube_replica_set", owner.name, TagCardinality.LOW)]

    key, cardinality = OWNER_TAG_POLICY[kind]
    return [(key, owner.name, cardinality)]
