#!/usr/bin/env python3
"""
KUBETAGGER EXTRACTOR - Pod & Container Tag Builder
--------------------------------------------------
Turns a snapshot of kubelet pods into tag records: one per pod (when it
has a UID) and one per container.

Tagging is best effort. Unknown owner kinds, unmatched containers and
unparsable images only drop the affected tags; they are logged at debug
level and reported to the optional diagnostics sink.

Author: KubeTagger Team
Date: 2026-10-19
"""

import logging
from typing import Dict, Iterable, List, Optional

from kubetagger.core.models import ContainerStatus, Pod, TagInfo
from kubetagger.tagging.owners import resolve_owner_tags
from kubetagger.tagging.taglist import TagList
from kubetagger.utils.containers import (
    ImageNameError,
    pod_uid_to_entity_name,
    split_image_name,
    trim_runtime_from_cid,
)
from kubetagger.utils.patterns import path_match

logger = logging.getLogger("kubetagger.extractor")

KUBELET_COLLECTOR_NAME = "kubelet"

# Placeholder replaced by the label name in labels_as_tags templates
LABEL_TEMPLATE_VAR = "%%label%%"

OSHIFT_DEPLOYMENT_CONFIG_ANNOTATION = "openshift.io/deployment-config.name"
OSHIFT_DEPLOYMENT_ANNOTATION = "openshift.io/deployment.name"

# Kubernetes defaults to 'latest' when an image has no tag
DEFAULT_IMAGE_TAG = "latest"


def resolve_tag(template: str, label: str) -> str:
    """Expands the %%label%% placeholder of a tag name template."""
    return template.replace(LABEL_TEMPLATE_VAR, label)


class KubeletTagExtractor:
    """
    Builds tag records from kubelet pods.

    Args:
        labels_as_tags: glob pattern on the lower-cased label key -> tag name template.
        annotations_as_tags: lower-cased annotation key -> tag name.
    """

    def __init__(self, labels_as_tags: Optional[Dict[str, str]] = None,
                 annotations_as_tags: Optional[Dict[str, str]] = None):
        self.labels_as_tags = dict(labels_as_tags or {})
        self.annotations_as_tags = dict(annotations_as_tags or {})

    def parse_pods(self, pods: Iterable[Pod],
                   diagnostics: Optional[List[str]] = None) -> List[TagInfo]:
        """
        Converts pods into TagInfo records, pod record first, then its containers.
        """
        output: List[TagInfo] = []
        for pod in pods:
            output.extend(self._parse_pod(pod, diagnostics))
        return output

    def _parse_pod(self, pod: Pod, diagnostics: Optional[List[str]]) -> List[TagInfo]:
        meta = pod.metadata
        tags = TagList()

        tags.add_high("pod_name", meta.name)
        tags.add_low("kube_namespace", meta.namespace)

        # Pod labels
        for name, value in meta.labels.items():
            lowered = name.lower()
            for pattern, template in self.labels_as_tags.items():
                if path_match(pattern, lowered):
                    tags.add_auto(resolve_tag(template, name), value)

        # Pod annotations
        for name, value in meta.annotations.items():
            tag_name = self.annotations_as_tags.get(name.lower())
            if tag_name is not None:
                tags.add_auto(tag_name, value)

        # OpenShift pod annotations
        if OSHIFT_DEPLOYMENT_CONFIG_ANNOTATION in meta.annotations:
            tags.add_low("oshift_deployment_config", meta.annotations[OSHIFT_DEPLOYMENT_CONFIG_ANNOTATION])
        if OSHIFT_DEPLOYMENT_ANNOTATION in meta.annotations:
            tags.add_high("oshift_deployment", meta.annotations[OSHIFT_DEPLOYMENT_ANNOTATION])

        # Creator
        for owner in pod.owners():
            owner_tags = resolve_owner_tags(owner)
            if owner_tags is None:
                self._report(diagnostics, "unknown owner kind %s for pod %s", owner.kind, meta.name)
                continue
            for key, value, cardinality in owner_tags:
                tags.add(key, value, cardinality)

        records: List[TagInfo] = []
        low, high = tags.compute()
        if meta.uid:
            records.append(TagInfo(
                source=KUBELET_COLLECTOR_NAME,
                entity=pod_uid_to_entity_name(meta.uid),
                low_card_tags=low,
                high_card_tags=high,
            ))
        else:
            self._report(diagnostics, "pod %s/%s has no uid, skipping pod-level record",
                         meta.namespace, meta.name)

        for container in pod.status_containers:
            records.append(self._parse_container(pod, container, tags, diagnostics))

        return records

    def _parse_container(self, pod: Pod, container: ContainerStatus, pod_tags: TagList,
                         diagnostics: Optional[List[str]]) -> TagInfo:
        c_tags = pod_tags.copy()
        c_tags.add_low("kube_container_name", container.name)
        c_tags.add_high("container_id", trim_runtime_from_cid(container.id))
        if container.name and pod.metadata.name:
            c_tags.add_high("display_container_name", f"{container.name}_{pod.metadata.name}")

        spec = next((s for s in pod.spec_containers if s.name == container.name), None)
        if spec is None:
            self._report(diagnostics, "no spec found for container %s in pod %s",
                         container.name, pod.metadata.name)
        else:
            try:
                image_name, short_image, image_tag = split_image_name(spec.image)
            except ImageNameError as e:
                self._report(diagnostics, "Cannot split %s: %s", spec.image, e)
            else:
                c_tags.add_low("image_name", image_name)
                c_tags.add_low("short_image", short_image)
                c_tags.add_low("image_tag", image_tag or DEFAULT_IMAGE_TAG)

        c_low, c_high = c_tags.compute()
        return TagInfo(
            source=KUBELET_COLLECTOR_NAME,
            entity=container.id,
            low_card_tags=c_low,
            high_card_tags=c_high,
        )

    @staticmethod
    def _report(diagnostics: Optional[List[str]], msg: str, *args):
        logger.debug(msg, *args)
        if diagnostics is not None:
            diagnostics.append(msg % args)
