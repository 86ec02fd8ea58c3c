"""Export a command tree for documentation and permission listings.

The exported form is a plain dict/list structure that maps onto both
JSON and YAML. Permissions are computed with the same rule ``resolve``
uses, so the listing matches what dispatch checks.

Usage
-----
::

    from cmdtree.export import TreeExporter

    exporter = TreeExporter()
    print(exporter.to_yaml(root))
    for path, permission in exporter.permissions(root).items():
        ...
"""
from __future__ import annotations

import json

import yaml

from cmdtree.core.node import CommandNode, NodeKind
from cmdtree.core.resolution import base_prefix
from cmdtree.core.root import RootNode


class TreeExporter:
    """Converts a command tree into plain Python data."""

    def to_dict(self, root: RootNode) -> dict[str, object]:
        """Serialize the tree rooted at ``root`` to a JSON-compatible dict."""
        prefix = base_prefix(root.owner)
        return {
            "kind": "root",
            "name": root.name,
            "usage": root.usage,
            "application": root.owner.name,
            "permission_base": prefix,
            "children": [
                self._node_to_dict(root.children[name], prefix, f"{root.name} {name}")
                for name in root.child_names
            ],
        }

    def to_json(self, root: RootNode, indent: int | None = 2) -> str:
        return json.dumps(self.to_dict(root), indent=indent)

    def to_yaml(self, root: RootNode) -> str:
        return yaml.safe_dump(self.to_dict(root), default_flow_style=False, sort_keys=False)

    def permissions(self, root: RootNode) -> dict[str, str]:
        """Return the permission checked for every node below ``root``.

        Keys are space-joined paths starting with the root's name, in
        alphabetical order; internal nodes are included.
        """
        found: dict[str, str] = {}
        self._collect_permissions(root, base_prefix(root.owner), root.name, found)
        return dict(sorted(found.items()))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _node_to_dict(self, node: CommandNode, prefix: str, path: str) -> dict[str, object]:
        permission = node.permission_for(prefix)
        return {
            "kind": "branch",
            "type": type(node).__name__,
            "name": node.name,
            "path": path,
            "description": node.description,
            "usage": node.usage,
            "permission": permission,
            "min_args": node.min_args,
            "children": [
                self._node_to_dict(node.children[name], permission, f"{path} {name}")
                for name in node.child_names
            ],
        }

    def _collect_permissions(
        self, node: CommandNode, prefix: str, path: str, found: dict[str, str]
    ) -> None:
        for name in node.child_names:
            child = node.children[name]
            if child.kind is NodeKind.ROOT:
                continue
            permission = child.permission_for(prefix)
            child_path = f"{path} {name}"
            found[child_path] = permission
            self._collect_permissions(child, permission, child_path, found)
