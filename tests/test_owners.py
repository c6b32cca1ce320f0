import pytest

from kubetagger.core.models import OwnerReference, TagCardinality
from kubetagger.tagging.owners import (
    DIGITS,
    KUBE_ALLOWED_ENCODE_STRING_ALPHANUMS,
    OWNER_TAG_POLICY,
    OwnerKind,
    parse_deployment_for_replicaset,
    resolve_owner_tags,
)


@pytest.mark.parametrize("name, expected", [
    ("web-7f9c8d6b5", "web"),
    ("web-7f9", "web"),
    ("redis-1234567890", "redis"),
    ("my-app-frontend-5d4f8c6b7", "my-app-frontend"),
    ("web-245", "web"),
    ("web-ab", ""),
    ("standalone-rs", ""),
    ("nodash", ""),
    ("trailing-", ""),
    ("web-abc", ""),      # 'a' is not in the reduced alphabet
    ("web-12b", ""),      # mixes both alphabets
    ("web-1f9", ""),      # '1' is only a digit, 'f' only alphanumeric
    ("web-7F9", ""),      # upper case never generated
    ("", ""),
])
def test_parse_deployment_for_replicaset(name, expected):
    assert parse_deployment_for_replicaset(name) == expected


@pytest.mark.parametrize("alphabet", [DIGITS, KUBE_ALLOWED_ENCODE_STRING_ALPHANUMS])
@pytest.mark.parametrize("length", [3, 5, 10])
def test_generated_suffixes_are_stripped(alphabet, length):
    """
    PROPERTY: any suffix of 3+ characters drawn from one alphabet is stripped.
    """
    suffix = (alphabet * 4)[:length]
    assert parse_deployment_for_replicaset(f"api-server-{suffix}") == "api-server"


def test_short_suffixes_are_kept():
    for char in KUBE_ALLOWED_ENCODE_STRING_ALPHANUMS:
        assert parse_deployment_for_replicaset(f"svc-{char}{char}") == ""


def test_owner_kind_parse():
    assert OwnerKind.parse("ReplicaSet") is OwnerKind.REPLICA_SET
    assert OwnerKind.parse("") is OwnerKind.NONE
    assert OwnerKind.parse("CustomController") is None
    assert OwnerKind.parse("deployment") is None


def test_policy_table_covers_every_direct_kind():
    direct = set(OwnerKind) - {OwnerKind.NONE, OwnerKind.REPLICA_SET}
    assert set(OWNER_TAG_POLICY) == direct


@pytest.mark.parametrize("kind, key, cardinality", [
    ("Deployment", "kube_deployment", TagCardinality.LOW),
    ("DaemonSet", "kube_daemon_set", TagCardinality.LOW),
    ("ReplicationController", "kube_replication_controller", TagCardinality.LOW),
    ("StatefulSet", "kube_stateful_set", TagCardinality.LOW),
    ("Job", "kube_job", TagCardinality.HIGH),
])
def test_resolve_direct_owner(kind, key, cardinality):
    assert resolve_owner_tags(OwnerReference(kind=kind, name="owner")) == [(key, "owner", cardinality)]


def test_resolve_replicaset_with_deployment():
    tags = resolve_owner_tags(OwnerReference(kind="ReplicaSet", name="nginx-7f9c8d6b5"))
    assert tags == [
        ("kube_replica_set", "nginx-7f9c8d6b5", TagCardinality.HIGH),
        ("kube_deployment", "nginx", TagCardinality.LOW),
    ]


def test_resolve_replicaset_without_deployment():
    tags = resolve_owner_tags(OwnerReference(kind="ReplicaSet", name="standalone-rs"))
    assert tags == [("kube_replica_set", "standalone-rs", TagCardinality.LOW)]


def test_resolve_empty_and_unknown_kinds():
    assert resolve_owner_tags(OwnerReference(kind="", name="x")) == []
    assert resolve_owner_tags(OwnerReference(kind="CustomController", name="x")) is None
