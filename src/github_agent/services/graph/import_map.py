"""
Import map builder

Resolves the import statements of repository files to other repository files.
Only relationships between files present in the listing are reported;
standard library and third-party imports resolve to nothing and are dropped.
"""

import posixpath
import re
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from loguru import logger

from github_agent.models import RepoFile
from github_agent.services.github.utils import language_from_path

_GO_IMPORT_BLOCK = re.compile(r"^\s*import\s*\((.*?)\)", re.S | re.M)
_GO_IMPORT_LINE = re.compile(r'^\s*import\s+(?:[\w.]+\s+)?"([^"]+)"', re.M)
_QUOTED = re.compile(r'"([^"]+)"')
_GO_MODULE = re.compile(r"^\s*module\s+(\S+)", re.M)

_JS_IMPORT = re.compile(r"""^\s*(?:import|export)\s+(?:[\w*{}\s,$]+\s+from\s+)?["']([^"']+)["']""", re.M)
_JS_REQUIRE = re.compile(r"""\brequire\(\s*["']([^"']+)["']\s*\)""")
_JS_DYNAMIC_IMPORT = re.compile(r"""\bimport\(\s*["']([^"']+)["']\s*\)""")

_PY_IMPORT = re.compile(r"^\s*import\s+([\w.]+(?:\s*,\s*[\w.]+)*)", re.M)
_PY_FROM_IMPORT = re.compile(r"^\s*from\s+(\.*[\w.]*)\s+import\s+\(?([\w \t,*]+)", re.M)

_C_INCLUDE = re.compile(r'^\s*#include\s*"([^"]+)"', re.M)

_JS_EXTENSIONS = (".js", ".jsx", ".ts", ".tsx", ".json")
_JS_INDEX_FILES = ("index.js", "index.jsx", "index.ts", "index.tsx")
_C_EXTENSIONS = (".h", ".hpp")


def extract_imports(content: str, language: str) -> List[str]:
    """Raw import specifiers found in content"""
    if language == "Go":
        imports = []
        for block in _GO_IMPORT_BLOCK.findall(content):
            imports.extend(_QUOTED.findall(block))
        imports.extend(_GO_IMPORT_LINE.findall(content))
        return imports

    if language in ("JavaScript", "TypeScript"):
        return (
            _JS_IMPORT.findall(content)
            + _JS_REQUIRE.findall(content)
            + _JS_DYNAMIC_IMPORT.findall(content)
        )

    if language == "Python":
        imports = []
        for group in _PY_IMPORT.findall(content):
            imports.extend(name.strip() for name in group.split(","))
        for module, names in _PY_FROM_IMPORT.findall(content):
            imports.append(module)
            for name in names.replace("(", " ").split(","):
                name = name.split()[0] if name.split() else ""
                if name and name != "*":
                    separator = "" if module.endswith(".") else "."
                    imports.append(f"{module}{separator}{name}")
        return imports

    if language in ("C", "C++"):
        return _C_INCLUDE.findall(content)

    return []


class _Resolver:
    def __init__(self, files: Sequence[RepoFile], module_path: str):
        self.types = {f.path: f.type for f in files}
        self.module_path = module_path.rstrip("/")
        self.go_files: Dict[str, List[str]] = {}
        for f in files:
            if f.type == "file" and f.path.endswith(".go"):
                self.go_files.setdefault(posixpath.dirname(f.path), []).append(f.path)
        for paths in self.go_files.values():
            paths.sort()

    def is_file(self, path: str) -> bool:
        return self.types.get(path) == "file"

    def resolve(self, source: str, spec: str, language: str) -> Optional[str]:
        spec = spec.strip()
        if not spec:
            return None
        if language == "Go":
            return self._resolve_go(source, spec)
        if language in ("JavaScript", "TypeScript"):
            if not spec.startswith("."):
                return None
            return self._with_candidates(_join(source, spec), _JS_EXTENSIONS, _JS_INDEX_FILES)
        if language == "Python":
            return self._resolve_python(source, spec)
        if language in ("C", "C++"):
            return (
                self._with_candidates(_join(source, spec), _C_EXTENSIONS, ())
                or self._with_candidates(posixpath.normpath(spec), _C_EXTENSIONS, ())
            )
        return None

    def _with_candidates(self, base: Optional[str], extensions, index_files) -> Optional[str]:
        if not base:
            return None
        if self.is_file(base):
            return base
        for extension in extensions:
            if self.is_file(base + extension):
                return base + extension
        for index_file in index_files:
            candidate = posixpath.join(base, index_file)
            if self.is_file(candidate):
                return candidate
        return None

    def _resolve_go(self, source: str, spec: str) -> Optional[str]:
        if spec.startswith("."):
            directory = _join(source, spec)
        elif self.module_path and (spec == self.module_path or spec.startswith(self.module_path + "/")):
            directory = spec[len(self.module_path):].lstrip("/")
        else:
            return None
        if directory is None:
            return None
        candidates = [p for p in self.go_files.get(directory, []) if not p.endswith("_test.go")]
        return candidates[0] if candidates else None

    def _resolve_python(self, source: str, spec: str) -> Optional[str]:
        level = len(spec) - len(spec.lstrip("."))
        module = spec.lstrip(".").replace(".", "/")
        if level:
            base = posixpath.dirname(source)
            for _ in range(level - 1):
                base = posixpath.dirname(base)
            roots = [base]
        else:
            roots = ["", "src"]

        for root in roots:
            base = posixpath.join(root, module) if module else root
            if not base:
                continue
            resolved = self._with_candidates(posixpath.normpath(base), (".py",), ("__init__.py",))
            if resolved and resolved != source:
                return resolved
        return None


def _join(source: str, spec: str) -> Optional[str]:
    path = posixpath.normpath(posixpath.join(posixpath.dirname(source), spec))
    if path.startswith(".."):
        return None
    return path


def _stem(path: str) -> str:
    return posixpath.splitext(posixpath.basename(path))[0]


def build_import_map(
    files: Sequence[RepoFile],
    contents: Mapping[str, str],
    module_path: str = "",
) -> Dict[str, List[str]]:
    """Map each file path to the repository files it imports.

    contents holds the text of the files that were fetched; files without
    content only take part as import targets and in name-based pairing.
    A go.mod in contents provides the Go module path.
    """
    if "go.mod" in contents:
        match = _GO_MODULE.search(contents["go.mod"])
        if match:
            module_path = match.group(1)

    resolver = _Resolver(files, module_path)
    import_map: Dict[str, List[str]] = {}

    for path, content in contents.items():
        language = language_from_path(path)
        resolved: List[str] = []
        for spec in extract_imports(content or "", language):
            target = resolver.resolve(path, spec, language)
            if target and target != path and target not in resolved:
                resolved.append(target)
        if resolved:
            import_map[path] = resolved

    _add_name_pairs(files, resolver, import_map)

    logger.debug(f"Resolved imports for {len(import_map)} of {len(files)} entries")
    return import_map


def _add_name_pairs(files: Iterable[RepoFile], resolver: _Resolver, import_map: Dict[str, List[str]]):
    """Test files point at their implementation; unresolved Go files at their package siblings"""
    for f in files:
        if f.type != "file" or f.path in import_map:
            continue

        targets: List[str] = []
        stem = _stem(f.path)
        if stem.endswith("_test"):
            extension = posixpath.splitext(f.path)[1]
            implementation = posixpath.join(
                posixpath.dirname(f.path), stem[:-len("_test")] + extension
            )
            if resolver.is_file(implementation):
                targets.append(implementation)

        if f.path.endswith(".go"):
            siblings = resolver.go_files.get(posixpath.dirname(f.path), [])
            targets.extend(s for s in siblings if s != f.path and s not in targets)

        if targets:
            import_map[f.path] = targets
