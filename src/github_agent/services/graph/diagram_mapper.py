"""
Graph-to-diagram mapper

Turns the repository graph read from the graph store
({nodes: [{path, label, type}], relationships: [{source, targets: [{target, type}]}]})
into the architecture diagram consumed by the frontend. Nodes are classified
from their extension or directory name, filtered by focus paths and pruned to
the node cap of the requested detail level. When no graph is available the
same diagram shape is synthesised from a flat file listing.

Every edge of a produced diagram references two nodes of that diagram.
"""

import os
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from loguru import logger

from github_agent.models import DiagramData, DiagramEdge, DiagramNode, RepoFile

# extension -> (category, layer, technology)
EXTENSION_CLASSES = {
    ".go": ("backend", "backend", "Go"),
    ".js": ("frontend", "frontend", "JavaScript/TypeScript"),
    ".jsx": ("frontend", "frontend", "JavaScript/TypeScript"),
    ".ts": ("frontend", "frontend", "JavaScript/TypeScript"),
    ".tsx": ("frontend", "frontend", "JavaScript/TypeScript"),
    ".css": ("frontend", "frontend", "CSS"),
    ".scss": ("frontend", "frontend", "CSS"),
    ".sass": ("frontend", "frontend", "CSS"),
    ".less": ("frontend", "frontend", "CSS"),
    ".html": ("frontend", "frontend", "HTML"),
    ".sql": ("database", "database", "SQL"),
    ".md": ("documentation", "documentation", "Markdown"),
}
DEFAULT_FILE_CLASS = ("other", "unknown", "unknown")

# directory base name -> (category, layer)
DIRECTORY_CLASSES = {
    "model": ("data", "data"),
    "models": ("data", "data"),
    "controller": ("controller", "controller"),
    "controllers": ("controller", "controller"),
    "handlers": ("controller", "controller"),
    "view": ("view", "frontend"),
    "views": ("view", "frontend"),
    "templates": ("view", "frontend"),
    "config": ("configuration", "configuration"),
    "conf": ("configuration", "configuration"),
    "middleware": ("middleware", "middleware"),
    "middlewares": ("middleware", "middleware"),
    "service": ("service", "service"),
    "services": ("service", "service"),
    "util": ("utility", "utility"),
    "utils": ("utility", "utility"),
    "helper": ("utility", "utility"),
    "helpers": ("utility", "utility"),
    "test": ("test", "test"),
    "tests": ("test", "test"),
}
DEFAULT_DIRECTORY_CLASS = ("module", "module")
DIRECTORY_TECHNOLOGY = "N/A"

ENTRY_POINT_FILES = ("main.go", "index.js", "app.js", "server.js")
DEFAULT_EDGE_TYPE = "related_to"

FILE_NODE_SIZE = 5
DIRECTORY_NODE_SIZE = 7
FALLBACK_FILE_NODE_SIZE = 3
FALLBACK_DIRECTORY_NODE_SIZE = 6

_DIRECTORY_TYPES = {"dir", "directory", "tree"}
_FILE_TYPES = {"file", "blob"}


def classify_file(path: str) -> Tuple[str, str, str]:
    """Return (category, layer, technology) for a file path"""
    return EXTENSION_CLASSES.get(os.path.splitext(path)[1].lower(), DEFAULT_FILE_CLASS)


def classify_directory(path: str) -> Tuple[str, str]:
    """Return (category, layer) for a directory path"""
    base_name = os.path.basename(path.rstrip("/")).lower()
    return DIRECTORY_CLASSES.get(base_name, DEFAULT_DIRECTORY_CLASS)


def normalize_node_type(node_type: Any) -> str:
    value = str(node_type or "file").lower()
    if value in _DIRECTORY_TYPES:
        return "directory"
    if value in _FILE_TYPES:
        return "file"
    return "component"


def matches_focus(path: str, focus_paths: Sequence[str]) -> bool:
    prefixes = [prefix for prefix in focus_paths or [] if prefix]
    return not prefixes or any(path.startswith(prefix) for prefix in prefixes)


class DiagramMapper:
    """Maps repository graphs onto architecture diagrams"""

    def __init__(
        self,
        directory_boost: int = 10,
        entry_point_boost: int = 5,
        max_nodes: Optional[Dict[str, int]] = None,
    ):
        self.directory_boost = directory_boost
        self.entry_point_boost = entry_point_boost
        self.max_nodes = {"low": 30, "medium": 100}
        if max_nodes:
            self.max_nodes.update(max_nodes)

    def map_graph(
        self,
        graph: Dict[str, Any],
        detail: str = "medium",
        focus_paths: Optional[Sequence[str]] = None,
    ) -> DiagramData:
        """Build a diagram from a graph store result"""
        nodes: List[DiagramNode] = []
        seen = set()
        for raw_node in (graph or {}).get("nodes") or []:
            path = (raw_node or {}).get("path")
            if not path or path in seen or not matches_focus(path, focus_paths):
                continue
            seen.add(path)
            nodes.append(self._graph_node(path, raw_node))

        edges: List[DiagramEdge] = []
        for relationship in (graph or {}).get("relationships") or []:
            source = (relationship or {}).get("source")
            if source not in seen:
                continue
            for target_info in relationship.get("targets") or []:
                target = (target_info or {}).get("target")
                if not target or target not in seen:
                    continue
                edge_type = target_info.get("type") or DEFAULT_EDGE_TYPE
                edges.append(DiagramEdge(
                    source=source,
                    target=target,
                    type=edge_type,
                    weight=1,
                    label=edge_type,
                ))

        return self.prune(DiagramData(nodes=nodes, edges=edges), detail)

    def map_files(
        self,
        files: Iterable[RepoFile],
        detail: str = "medium",
        focus_paths: Optional[Sequence[str]] = None,
    ) -> DiagramData:
        """Fallback: synthesise a diagram from a flat file listing"""
        file_nodes: List[DiagramNode] = []
        directories = set()
        seen = set()
        for entry in files:
            path = entry.path
            if not path or not matches_focus(path, focus_paths):
                continue
            if entry.type == "file":
                if path in seen:
                    continue
                seen.add(path)
                category, layer, technology = classify_file(path)
                file_nodes.append(DiagramNode(
                    id=path,
                    label=entry.name or os.path.basename(path),
                    type="file",
                    size=FALLBACK_FILE_NODE_SIZE,
                    category=category,
                    layer=layer,
                    technology=technology,
                ))
            else:
                directories.add(path)
            directories.update(_ancestors(path))

        directories = {d for d in directories if d not in seen and matches_focus(d, focus_paths)}
        directory_nodes = [
            self._directory_node(path, FALLBACK_DIRECTORY_NODE_SIZE)
            for path in sorted(directories)
        ]

        edges = _containment_edges(file_nodes, sorted(directories))
        edges.extend(_test_edges(file_nodes))
        edges.extend(_usage_edges(file_nodes))

        return self.prune(DiagramData(nodes=file_nodes + directory_nodes, edges=edges), detail)

    def prune(self, diagram: DiagramData, detail: str) -> DiagramData:
        """Cap the node count for the detail level and drop dangling edges"""
        limit = None if detail == "high" else self.max_nodes.get(detail, self.max_nodes["medium"])
        nodes = diagram.nodes

        if limit is not None and len(nodes) > limit:
            scores = self._importance(nodes, diagram.edges)
            for node in nodes:
                node.size = scores[node.id] + 1
            # sorted() is stable: ties keep insertion order
            nodes = sorted(nodes, key=lambda n: scores[n.id], reverse=True)[:limit]
            logger.debug(f"Pruned diagram from {len(diagram.nodes)} to {len(nodes)} nodes for detail '{detail}'")

        kept = {node.id for node in nodes}
        edges = [edge for edge in diagram.edges if edge.source in kept and edge.target in kept]
        return DiagramData(nodes=nodes, edges=edges)

    def _importance(self, nodes: List[DiagramNode], edges: List[DiagramEdge]) -> Dict[str, int]:
        scores = {node.id: 0 for node in nodes}
        for edge in edges:
            if edge.source in scores:
                scores[edge.source] += 1
            if edge.target in scores:
                scores[edge.target] += 1
        for node in nodes:
            if node.type == "directory":
                scores[node.id] += self.directory_boost
            if any(name in node.id for name in ENTRY_POINT_FILES):
                scores[node.id] += self.entry_point_boost
        return scores

    def _graph_node(self, path: str, raw_node: Dict[str, Any]) -> DiagramNode:
        node_type = normalize_node_type(raw_node.get("type"))
        label = raw_node.get("label") or os.path.basename(path) or path
        if node_type == "directory":
            node = self._directory_node(path, DIRECTORY_NODE_SIZE)
            node.label = label
            return node

        category, layer, technology = classify_file(path)
        return DiagramNode(
            id=path,
            label=label,
            type=node_type,
            size=FILE_NODE_SIZE,
            category=category,
            layer=layer,
            technology=technology,
        )

    def _directory_node(self, path: str, size: int) -> DiagramNode:
        category, layer = classify_directory(path)
        return DiagramNode(
            id=path,
            label=os.path.basename(path.rstrip("/")) or path,
            type="directory",
            size=size,
            category=category,
            layer=layer,
            technology=DIRECTORY_TECHNOLOGY,
        )


def find_important_nodes(diagram: DiagramData) -> List[DiagramNode]:
    """Nodes worth describing: directories and nodes with more than 2 connections"""
    connections = {node.id: 0 for node in diagram.nodes}
    for edge in diagram.edges:
        connections[edge.source] = connections.get(edge.source, 0) + 1
        connections[edge.target] = connections.get(edge.target, 0) + 1
    return [
        node for node in diagram.nodes
        if node.type == "directory" or connections.get(node.id, 0) > 2
    ]


def _ancestors(path: str) -> List[str]:
    parents = []
    parent = os.path.dirname(path)
    while parent and parent != ".":
        parents.append(parent)
        parent = os.path.dirname(parent)
    return parents


def _edge(source: str, target: str, edge_type: str, weight: int) -> DiagramEdge:
    return DiagramEdge(source=source, target=target, type=edge_type, weight=weight, label=edge_type)


def _containment_edges(file_nodes: List[DiagramNode], directories: List[str]) -> List[DiagramEdge]:
    present = set(directories)
    edges = []
    for directory in directories:
        parent = os.path.dirname(directory)
        if parent in present:
            edges.append(_edge(parent, directory, "contains", 2))
    for node in file_nodes:
        parent = os.path.dirname(node.id)
        if parent in present:
            edges.append(_edge(parent, node.id, "contains", 1))
    return edges


def _stem(path: str) -> str:
    return os.path.splitext(os.path.basename(path))[0]


def _test_edges(file_nodes: List[DiagramNode]) -> List[DiagramEdge]:
    """'foo_test' files test their 'foo' sibling"""
    by_stem: Dict[str, List[str]] = {}
    for node in file_nodes:
        by_stem.setdefault(_stem(node.id), []).append(node.id)

    edges = []
    for node in file_nodes:
        stem = _stem(node.id)
        if not stem.endswith("_test"):
            continue
        for target in by_stem.get(stem[:-len("_test")], []):
            edges.append(_edge(node.id, target, "tests", 3))
    return edges


def _in_directory(path: str, names: Tuple[str, ...]) -> bool:
    parts = path.lower().split("/")[:-1]
    return any(part in names for part in parts)


def _usage_edges(file_nodes: List[DiagramNode]) -> List[DiagramEdge]:
    """Controllers use the models their file name mentions"""
    models = [n.id for n in file_nodes if _in_directory(n.id, ("model", "models"))]
    controllers = [n.id for n in file_nodes if _in_directory(n.id, ("controller", "controllers"))]

    edges = []
    for controller in controllers:
        controller_stem = _stem(controller).lower()
        for model in models:
            model_stem = _stem(model).lower()
            if model_stem and model_stem in controller_stem:
                edges.append(_edge(controller, model, "uses", 2))
    return edges
