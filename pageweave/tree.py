"""
================================================================================
Page Object Tree
================================================================================

Collects the relationship graph reachable from a root into a rustworkx
digraph and renders it as Graphviz DOT text, for documentation and for
attaching to Allure reports.

Usage:
    >>> tree = PageObjectTree(tab)
    >>> tree.node_count, tree.edge_count
    (4, 3)
    >>> tree.write("reports/page_objects.dot")

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Dict, List, Tuple, Union

import allure
import rustworkx as rx
from loguru import logger

from .descriptors import TypeDescriptor
from .relationships import Origin

if TYPE_CHECKING:
    from .tab_object import TabObject


# Node fill colours by kind
NODE_COLORS: Dict[str, str] = {
    "root": "lightskyblue",
    "page": "palegreen",
}


class PageObjectTree:
    """
    Nodes and edges reachable downwards from a root.

    Only closed descriptors are rendered: bare generic children are skipped
    because they stand for an open set of instantiations.
    """

    def __init__(self, root: "TabObject"):
        self._root = root
        self._graph: rx.PyDiGraph = rx.PyDiGraph(multigraph=False)
        self._build()

    def _build(self) -> None:
        edges = [
            edge for edge in self._root.relationships.edges()
            if not (getattr(edge.child.base, "__parameters__", ()) and not edge.child.args)
        ]

        graph = rx.PyDiGraph(multigraph=False)
        indices: Dict[TypeDescriptor, int] = {}
        for descriptor in [self._root.descriptor] + [edge.child for edge in edges]:
            if descriptor not in indices:
                indices[descriptor] = graph.add_node(descriptor)

        # A node hangs below every node assignable to its declared parent
        for node, node_index in indices.items():
            for edge in edges:
                if node.is_assignable_to(edge.parent):
                    graph.add_edge(node_index, indices[edge.child], edge.origin)

        start = indices[self._root.descriptor]
        reachable = sorted({start} | set(rx.descendants(graph, start)))
        self._graph = graph.subgraph(reachable)

    @property
    def graph(self) -> rx.PyDiGraph:
        return self._graph

    @property
    def nodes(self) -> List[TypeDescriptor]:
        return [self._graph[index] for index in self._graph.node_indices()]

    @property
    def edges(self) -> List[Tuple[TypeDescriptor, TypeDescriptor, Origin]]:
        return [
            (self._graph[parent], self._graph[child], origin)
            for parent, child, origin in self._graph.weighted_edge_list()
        ]

    @property
    def node_count(self) -> int:
        return self._graph.num_nodes()

    @property
    def edge_count(self) -> int:
        return self._graph.num_edges()

    def to_dot(self) -> str:
        """
        Render the tree in Graphviz DOT syntax.

        Static edges are solid, dynamic edges dashed.
        """
        root = self._root.descriptor

        def node_attr(descriptor: TypeDescriptor) -> Dict[str, str]:
            kind = "root" if descriptor == root else "page"
            return {
                "label": f'"{descriptor}"',
                "shape": "box",
                "style": "filled",
                "fillcolor": f'"{NODE_COLORS[kind]}"',
            }

        def edge_attr(origin: Origin) -> Dict[str, str]:
            return {"style": "solid" if origin is Origin.STATIC else "dashed"}

        return self._graph.to_dot(
            node_attr=node_attr,
            edge_attr=edge_attr,
            graph_attr={"rankdir": "TB"},
        )

    def write(self, path: Union[str, Path]) -> Path:
        """Write the DOT rendering to ``path``, creating parent directories."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.to_dot(), encoding="utf-8")
        logger.debug(f"Page object tree written to: {target}")
        return target


def attach_tree(root: "TabObject", name: str = "Page Object Tree") -> str:
    """
    Attach the rendered tree of ``root`` to the Allure report.

    Returns:
        The DOT text that was attached
    """
    dot = PageObjectTree(root).to_dot()
    allure.attach(
        dot,
        name=name,
        attachment_type=allure.attachment_type.TEXT
    )
    return dot


__all__ = [
    "PageObjectTree",
    "attach_tree",
    "NODE_COLORS",
]
