#!/usr/bin/env python3
"""
KUBETAGGER CONTAINER UTILITIES
------------------------------
Small string helpers for container identifiers and image references.

Author: KubeTagger Team
Date: 2026-10-19
"""

from typing import Tuple

POD_ENTITY_PREFIX = "kubernetes_pod://"
RUNTIME_SEPARATOR = "://"


class ImageNameError(ValueError):
    """Raised when an image reference cannot be split."""


def split_image_name(image: str) -> Tuple[str, str, str]:
    """
    Splits an image reference into its long name, short name and tag.

    Example: "gcr.io/org/nginx:1.19@sha256:abc" -> ("gcr.io/org/nginx", "nginx", "1.19")

    The tag is empty when the reference has none.

    Raises:
        ImageNameError: on an empty reference.
    """
    if not image:
        raise ImageNameError("empty image name")

    # Strip digest
    long_name = image.split("@sha", 1)[0]
    if not long_name:
        raise ImageNameError(f"no image name before digest in '{image}'")

    tag = ""
    last_colon = long_name.rfind(":")
    # A colon before the last slash belongs to a registry port, not a tag
    if last_colon > -1 and last_colon > long_name.rfind("/"):
        tag = long_name[last_colon + 1:]
        long_name = long_name[:last_colon]

    short_name = long_name.rsplit("/", 1)[-1]
    if not short_name:
        raise ImageNameError(f"cannot find short image name in '{image}'")

    return long_name, short_name, tag


def trim_runtime_from_cid(cid: str) -> str:
    """Removes the runtime prefix ('docker://', 'containerd://', ...) from a container id."""
    parts = cid.split(RUNTIME_SEPARATOR, 1)
    return parts[-1]


def pod_uid_to_entity_name(uid: str) -> str:
    """Builds the canonical pod entity id from a pod UID."""
    if not uid:
        return ""
    return POD_ENTITY_PREFIX + uid
