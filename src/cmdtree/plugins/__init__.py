"""Node-type plugins for cmdtree manifests.

Third-party node types register through ``importlib.metadata``
entry-points under the "cmdtree.nodes" group.

Example
-------
Declare a node type in pyproject.toml:

.. code-block:: toml

    [project.entry-points."cmdtree.nodes"]
    greet = "my_package.commands:GreetCommand"
"""
from __future__ import annotations

from cmdtree.plugins.registry import (
    ENTRY_POINT_GROUP,
    NodeTypeAlreadyRegisteredError,
    NodeTypeNotFoundError,
    NodeTypeRegistry,
    node_types,
)

__all__ = [
    "ENTRY_POINT_GROUP",
    "NodeTypeAlreadyRegisteredError",
    "NodeTypeNotFoundError",
    "NodeTypeRegistry",
    "node_types",
]
