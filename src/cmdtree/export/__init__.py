"""Tree export to dict, JSON and YAML."""
from __future__ import annotations

from cmdtree.export.exporter import TreeExporter

__all__ = ["TreeExporter"]
