"""Declarative YAML manifests for command trees."""
from __future__ import annotations

from cmdtree.manifest.loader import (
    Manifest,
    build_manifest,
    load_manifest,
    parse_manifest,
)

__all__ = ["Manifest", "build_manifest", "load_manifest", "parse_manifest"]
