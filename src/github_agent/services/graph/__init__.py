"""
Repository graph services
"""

from github_agent.services.graph.diagram_mapper import (
    DiagramMapper,
    classify_file,
    classify_directory,
    find_important_nodes,
)
from github_agent.services.graph.import_map import build_import_map, extract_imports
from github_agent.services.graph.neo4j_service import Neo4jGraphService

__all__ = [
    "DiagramMapper",
    "classify_file",
    "classify_directory",
    "find_important_nodes",
    "build_import_map",
    "extract_imports",
    "Neo4jGraphService",
]
