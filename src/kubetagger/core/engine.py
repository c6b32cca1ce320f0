#!/usr/bin/env python3
"""
KUBETAGGER ENGINE - The Orchestrator
------------------------------------
Loads kubelet pod payloads from disk and runs them through the tag
extractor, producing one report per payload file.

Author: KubeTagger Team
Date: 2026-10-19
"""

import logging
import time
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from kubetagger.core.config import TaggerConfig
from kubetagger.core.models import Pod, PodPayloadError, parse_pod_list
from kubetagger.tagging.extractor import KubeletTagExtractor
from kubetagger.utils.containers import POD_ENTITY_PREFIX

logger = logging.getLogger("kubetagger.engine")

PAYLOAD_EXTENSIONS = (".json", ".yaml", ".yml")


class TaggingEngine:
    """
    Coordinates payload loading, extraction and reporting.
    Holds only the configuration snapshot; every extraction is independent.
    """

    def __init__(self, config: Optional[TaggerConfig] = None):
        self.config = config or TaggerConfig()
        self.extractor = KubeletTagExtractor(
            labels_as_tags=self.config.labels_as_tags,
            annotations_as_tags=self.config.annotations_as_tags,
        )
        # JSON is a subset of YAML, one safe loader covers both formats
        self.yaml = YAML(typ='safe')

    def load_pods(self, path: str) -> List[Pod]:
        """
        Reads a kubelet /pods payload (PodList or list of pods).

        Raises:
            PodPayloadError: if the file is missing, unreadable or malformed.
        """
        payload_path = Path(path)
        try:
            raw_text = payload_path.read_text(encoding='utf-8-sig')
            payload = self.yaml.load(raw_text)
        except (OSError, UnicodeDecodeError, YAMLError) as e:
            raise PodPayloadError(f"Unable to read pod payload {payload_path}: {e}")
        return parse_pod_list(payload)

    def extract_file(self, path: str) -> Dict[str, Any]:
        """
        Extracts tag records from a single payload file.
        Failures are reported in the result instead of raised.
        """
        try:
            pods = self.load_pods(path)
        except PodPayloadError as e:
            logger.error(f"Error processing {path}: {e}")
            return self._file_error(path, str(e))

        diagnostics: List[str] = []
        records = self.extractor.parse_pods(pods, diagnostics=diagnostics)

        return {
            "file_path": str(path),
            "success": True,
            "pod_count": len(pods),
            "records": records,
            "diagnostics": diagnostics,
            "error": None,
            "timestamp": time.time(),
        }

    def scan_directory(self, directory: str,
                       progress_callback: Optional[Callable[[int, int], None]] = None) -> List[Dict[str, Any]]:
        """Extracts every payload file found under a directory (symlinks skipped)."""
        root = Path(directory)
        files = sorted(
            f for f in root.rglob("*")
            if f.is_file() and not f.is_symlink() and f.suffix.lower() in PAYLOAD_EXTENSIONS
        )

        reports = []
        for processed, file_path in enumerate(files, 1):
            reports.append(self.extract_file(str(file_path)))
            if progress_callback:
                progress_callback(processed, len(files))
        return reports

    def generate_summary(self, reports: List[Dict[str, Any]]) -> Dict[str, Any]:
        """Aggregated counters over a batch of reports."""
        pod_records = 0
        container_records = 0
        for r in reports:
            for record in r.get("records", []):
                if record.entity.startswith(POD_ENTITY_PREFIX):
                    pod_records += 1
                else:
                    container_records += 1

        return {
            "total_files": len(reports),
            "failed": sum(1 for r in reports if not r.get("success", False)),
            "pods": sum(r.get("pod_count", 0) for r in reports),
            "pod_records": pod_records,
            "container_records": container_records,
            "diagnostics": sum(len(r.get("diagnostics", [])) for r in reports),
            "summary_timestamp": time.strftime("%Y-%m-%d %H:%M:%S"),
        }

    def _file_error(self, path: str, error: str) -> Dict[str, Any]:
        return {
            "file_path": str(path), "success": False, "pod_count": 0,
            "records": [], "diagnostics": [], "error": error,
            "timestamp": time.time(),
        }
