import pytest

from kubetagger.utils.containers import (
    ImageNameError,
    pod_uid_to_entity_name,
    split_image_name,
    trim_runtime_from_cid,
)


@pytest.mark.parametrize("image, expected", [
    ("nginx", ("nginx", "nginx", "")),
    ("nginx:1.19", ("nginx", "nginx", "1.19")),
    ("library/nginx:latest", ("library/nginx", "nginx", "latest")),
    ("gcr.io/org/team/nginx:1.19", ("gcr.io/org/team/nginx", "nginx", "1.19")),
    ("localhost:5000/foo/bar", ("localhost:5000/foo/bar", "bar", "")),
    ("localhost:5000/foo/bar:dev", ("localhost:5000/foo/bar", "bar", "dev")),
    ("nginx@sha256:0123abcd", ("nginx", "nginx", "")),
    ("nginx:1.19@sha256:0123abcd", ("nginx", "nginx", "1.19")),
])
def test_split_image_name(image, expected):
    assert split_image_name(image) == expected


@pytest.mark.parametrize("image", ["", "@sha256:0123abcd", "registry/"])
def test_split_image_name_errors(image):
    with pytest.raises(ImageNameError):
        split_image_name(image)


@pytest.mark.parametrize("cid, expected", [
    ("docker://c1", "c1"),
    ("containerd://abc123", "abc123"),
    ("cri-o://xyz", "xyz"),
    ("plain", "plain"),
    ("", ""),
])
def test_trim_runtime_from_cid(cid, expected):
    assert trim_runtime_from_cid(cid) == expected


def test_pod_uid_to_entity_name():
    assert pod_uid_to_entity_name("u1") == "kubernetes_pod://u1"
    assert pod_uid_to_entity_name("") == ""
