"""
Neo4j graph store for repository structure

Layout: (Repository {owner, name})-[:HAS_BRANCH]->(Branch {name})
-[:CONTAINS]->(File {path, name, type}), with (File)-[:IMPORTS]->(File).
"""

from typing import Any, Dict, List, Mapping, Optional, Sequence

from neo4j import GraphDatabase, basic_auth
from loguru import logger

from github_agent.config import settings
from github_agent.core.exceptions import GraphStoreError, ServiceUnavailableError
from github_agent.models import RepoFile

_CLEAR_BRANCH = """
MATCH (r:Repository {owner: $owner, name: $repo})-[:HAS_BRANCH]->(b:Branch {name: $branch})
OPTIONAL MATCH (b)-[:CONTAINS]->(f:File)
DETACH DELETE f, b
"""

_MERGE_BRANCH = """
MERGE (r:Repository {owner: $owner, name: $repo})
MERGE (r)-[:HAS_BRANCH]->(b:Branch {name: $branch})
RETURN b
"""

_MERGE_FILES = """
MATCH (r:Repository {owner: $owner, name: $repo})-[:HAS_BRANCH]->(b:Branch {name: $branch})
UNWIND $files AS file
MERGE (b)-[:CONTAINS]->(f:File {path: file.path})
SET f.name = file.name, f.type = file.type
"""

_MERGE_IMPORTS = """
MATCH (r:Repository {owner: $owner, name: $repo})-[:HAS_BRANCH]->(b:Branch {name: $branch})
UNWIND $imports AS link
MATCH (b)-[:CONTAINS]->(source:File {path: link.source})
MATCH (b)-[:CONTAINS]->(target:File {path: link.target})
MERGE (source)-[:IMPORTS]->(target)
"""

_READ_GRAPH = """
MATCH (r:Repository {owner: $owner, name: $repo})-[:HAS_BRANCH]->(b:Branch {name: $branch})
MATCH (b)-[:CONTAINS]->(f:File)
OPTIONAL MATCH (f)-[rel:IMPORTS]->(f2:File)
WITH f, collect(CASE WHEN f2 IS NULL THEN NULL ELSE {target: f2.path, type: type(rel)} END) AS targets
RETURN f.path AS path, f.name AS label, f.type AS type, targets
ORDER BY path
"""


class Neo4jGraphService:
    """Neo4j repository graph service"""

    BATCH_SIZE = 500

    def __init__(self, uri: Optional[str] = None, username: Optional[str] = None,
                 password: Optional[str] = None, database: Optional[str] = None):
        self.uri = uri or settings.neo4j_uri
        self.username = username or settings.neo4j_username
        self.password = password or settings.neo4j_password
        self.database = database or settings.neo4j_database
        self.driver = None
        self._connected = False

    @property
    def connected(self) -> bool:
        return self._connected

    async def connect(self) -> bool:
        """connect to Neo4j database"""
        try:
            self.driver = GraphDatabase.driver(
                self.uri,
                auth=basic_auth(self.username, self.password)
            )

            # test connection
            with self.driver.session(database=self.database) as session:
                result = session.run("RETURN 1 as test")
                result.single()

            self._connected = True
            logger.info(f"Successfully connected to Neo4j at {self.uri}")

            await self._setup_schema()
            return True

        except Exception as e:
            logger.error(f"Failed to connect to Neo4j: {e}")
            return False

    async def _setup_schema(self):
        """create indexes used by repository lookups"""
        indexes = [
            "CREATE INDEX repository_key IF NOT EXISTS FOR (r:Repository) ON (r.owner, r.name)",
            "CREATE INDEX file_path IF NOT EXISTS FOR (f:File) ON (f.path)",
        ]
        try:
            with self.driver.session(database=self.database) as session:
                for index in indexes:
                    try:
                        session.run(index)
                    except Exception as e:
                        if "already exists" not in str(e).lower():
                            logger.warning(f"Failed to create index: {e}")
        except Exception as e:
            logger.error(f"Failed to setup schema: {e}")

    def _require_connection(self):
        if not self._connected:
            raise ServiceUnavailableError("Neo4j graph store is not available")

    async def store_codebase_structure(
        self,
        owner: str,
        repo: str,
        branch: str,
        files: Sequence[RepoFile],
        import_map: Mapping[str, List[str]],
    ) -> Dict[str, int]:
        """Replace the stored structure of one repository branch"""
        self._require_connection()
        params = {"owner": owner, "repo": repo, "branch": branch}
        file_rows = [{"path": f.path, "name": f.name, "type": f.type} for f in files]
        import_rows = [
            {"source": source, "target": target}
            for source, targets in import_map.items()
            for target in targets
        ]

        try:
            with self.driver.session(database=self.database) as session:
                session.run(_CLEAR_BRANCH, params).consume()
                session.run(_MERGE_BRANCH, params).consume()
                for batch in _batches(file_rows, self.BATCH_SIZE):
                    session.run(_MERGE_FILES, {**params, "files": batch}).consume()
                for batch in _batches(import_rows, self.BATCH_SIZE):
                    session.run(_MERGE_IMPORTS, {**params, "imports": batch}).consume()
        except Exception as e:
            logger.error(f"Failed to store structure of {owner}/{repo}@{branch}: {e}")
            raise GraphStoreError.wrap(e, "failed to store codebase structure")

        logger.info(f"Stored {len(file_rows)} files and {len(import_rows)} imports for {owner}/{repo}@{branch}")
        return {"files": len(file_rows), "imports": len(import_rows)}

    async def get_codebase_graph(self, owner: str, repo: str, branch: str) -> Dict[str, Any]:
        """Return {nodes: [{id, label, type, path}], relationships: [{source, targets}]}"""
        self._require_connection()
        nodes: List[Dict[str, Any]] = []
        relationships: List[Dict[str, Any]] = []
        try:
            with self.driver.session(database=self.database) as session:
                result = session.run(_READ_GRAPH, {"owner": owner, "repo": repo, "branch": branch})
                for record in result:
                    path = record["path"]
                    nodes.append({
                        "id": path,
                        "label": record["label"],
                        "type": record["type"],
                        "path": path,
                    })
                    relationships.append({"source": path, "targets": list(record["targets"] or [])})
        except Exception as e:
            logger.error(f"Failed to read graph of {owner}/{repo}@{branch}: {e}")
            raise GraphStoreError.wrap(e, "failed to get codebase graph")

        return {"nodes": nodes, "relationships": relationships}

    async def close(self):
        """close database connection"""
        try:
            if self.driver:
                self.driver.close()
                self._connected = False
                logger.info("Disconnected from Neo4j")
        except Exception as e:
            logger.error(f"Failed to close Neo4j connection: {e}")


def _batches(rows: List[Dict[str, Any]], size: int):
    for start in range(0, len(rows), size):
        yield rows[start:start + size]
