"""
Prompt builder

Each function embeds repository data into task instructions. Structured tasks
ask for one JSON object whose keys match the result models; the parsers cope
when the model ignores the request.
"""

import json
from typing import Any, Dict, List, Mapping, Optional, Sequence

from github_agent.models import DiagramData, PullRequest, RepositoryInfo

DEFAULT_MAX_FILE_CHARS = 8000
MAX_PATCH_CHARS = 1500


def truncate(content: str, limit: int = DEFAULT_MAX_FILE_CHARS) -> str:
    if len(content) <= limit:
        return content
    return content[:limit] + f"\n... [truncated {len(content) - limit} characters]"


def _repository_block(info: RepositoryInfo) -> str:
    languages = ", ".join(info.languages) or info.language or "unknown"
    return (
        f"Repository: {info.full_name or info.owner + '/' + info.name}\n"
        f"Description: {info.description or 'No description'}\n"
        f"Primary language: {info.language or 'unknown'}\n"
        f"Languages: {languages}"
    )


def _files_block(files: Mapping[str, str], limit: int) -> str:
    return "\n\n".join(
        f"File: {path}\n```\n{truncate(content, limit)}\n```" for path, content in files.items()
    )


def build_walkthrough_prompt(
    info: RepositoryInfo,
    files: Mapping[str, str],
    entry_points: Sequence[str],
    focus_path: str = "",
    limit: int = DEFAULT_MAX_FILE_CHARS,
) -> str:
    focus = f"\nFocus the walkthrough on: {focus_path}\n" if focus_path else ""
    return f"""You are a senior engineer onboarding a new developer to a codebase.

{_repository_block(info)}
Entry points: {", ".join(entry_points) or "unknown"}
{focus}
Key files:
{_files_block(files, limit)}

Write a guided walkthrough that starts at the entry points and follows the flow of the code.

Respond with a single JSON object with this structure:
{{
  "overview": "What the project does and how it is organised",
  "entry_points": ["path/to/entry"],
  "walkthrough": [
    {{"name": "Step title", "path": "path/to/file", "description": "What happens here", "importance": 8}}
  ],
  "dependencies": {{"path/to/file": ["path/to/imported/file"]}}
}}

importance is an integer from 1 to 10."""


def build_function_explainer_prompt(code: str, language: str, file_path: str, function_name: str = "") -> str:
    name = f" `{function_name}`" if function_name else ""
    return f"""Explain the {language} function{name} from {file_path}.

```
{code}
```

Respond with a single JSON object with this structure:
{{
  "function_name": "{function_name}",
  "description": "What the function does",
  "parameters": [{{"name": "param", "type": "type", "description": "meaning"}}],
  "return_values": [{{"name": "result", "type": "type", "description": "meaning"}}],
  "usage_examples": ["example code"],
  "complexity": "time and space complexity",
  "related_functions": ["other_function"]
}}"""


def build_keyword_extraction_prompt(question: str, language: str = "") -> str:
    stack = f" The codebase is mostly written in {language}." if language else ""
    return f"""Extract up to 5 search keywords for finding code that answers this question about a repository.{stack}
Prefer identifiers, file names and technical terms over common words.

Question: {question}

Respond with a JSON object: {{"keywords": ["keyword1", "keyword2"]}}"""


def build_codebase_qa_prompt(
    info: RepositoryInfo,
    question: str,
    relevant_code: Mapping[str, str],
    limit: int = DEFAULT_MAX_FILE_CHARS,
) -> str:
    return f"""You are answering a question about a codebase.

{_repository_block(info)}

Relevant code:
{_files_block(relevant_code, limit)}

Question: {question}

Answer precisely and cite file paths and line numbers (for example "lines 10-15") where relevant.

Respond with a single JSON object with this structure:
{{
  "answer": "Markdown answer",
  "relevant_files": [
    {{"path": "path/to/file", "snippet": "relevant excerpt", "relevance": 90, "start_line": 10, "end_line": 15}}
  ],
  "followup_questions": ["A natural next question?"]
}}

relevance is an integer from 1 to 100."""


def build_best_practices_prompt(
    info: RepositoryInfo,
    files: Mapping[str, str],
    scope: str,
    limit: int = DEFAULT_MAX_FILE_CHARS,
) -> str:
    return f"""Review the coding conventions of this repository ({scope} scope).

{_repository_block(info)}

Code samples:
{_files_block(files, limit)}

Describe the style the code follows, the best practices it applies or should apply, and concrete issues.

Respond with a single JSON object with this structure:
{{
  "style_guide": "Markdown style guide",
  "practices": [{{"title": "Practice", "description": "Why and how", "examples": ["code"]}}],
  "issues": [
    {{"path": "path/to/file", "line": 42, "description": "Problem", "severity": "low|medium|high", "suggestion": "Fix"}}
  ]
}}"""


def build_component_description_prompt(path: str, content: str, limit: int = 2000) -> str:
    return f"""Describe in one or two sentences the role of {path} in its codebase.

```
{truncate(content, limit)}
```"""


def build_architecture_overview_prompt(owner: str, repo: str, diagram: DiagramData) -> str:
    directories = [node.id for node in diagram.nodes if node.type == "directory"][:40]
    layers = sorted({node.layer for node in diagram.nodes if node.layer != "unknown"})
    technologies = sorted({node.technology for node in diagram.nodes if node.technology not in ("unknown", "N/A")})
    return f"""Write a short architecture overview (one or two paragraphs of Markdown) of {owner}/{repo}.

Directories: {", ".join(directories) or "none"}
Layers: {", ".join(layers) or "unknown"}
Technologies: {", ".join(technologies) or "unknown"}
Files: {sum(1 for node in diagram.nodes if node.type == "file")}
Relationships: {len(diagram.edges)}"""


def build_graph_explanation_prompt(graph: Dict[str, Any], limit: int = 20000) -> str:
    return f"""You are an expert software architect. Analyze this codebase structure and provide a clear explanation.

Here is the graph data representing the codebase structure:
{truncate(json.dumps(graph), limit)}

Please provide:
1. A high-level overview of the architecture
2. Identification of key files and their roles in the system
3. Explanation of important relationships between files
4. Any notable patterns or architectural decisions evident from the graph

Your response should be well-structured and easy to read when rendered as Markdown."""


def build_pr_summary_prompt(pr: PullRequest, max_files: int = 10) -> str:
    largest = sorted(pr.files, key=lambda f: f.additions + f.deletions, reverse=True)[:max_files]
    details = []
    for f in largest:
        entry = f"- {f.filename} ({f.status}, +{f.additions} -{f.deletions})"
        if f.patch and len(f.patch) < MAX_PATCH_CHARS:
            entry += f"\n```diff\n{f.patch}\n```"
        details.append(entry)
    all_files = "\n".join(f"- {f.filename}" for f in pr.files)

    return f"""Summarize this pull request for reviewers.

Title: {pr.title}
Author: {pr.author}
Description:
{pr.body or "No description"}

Changed files ({len(pr.files)}):
{all_files}

Largest changes:
{chr(10).join(details)}

Respond with a single JSON object with this structure:
{{
  "title": "Concise title",
  "description": "What the PR does and why",
  "main_points": ["point"],
  "key_changes": ["change"],
  "file_groups": [{{"name": "group", "description": "purpose", "files": ["path"], "importance": 8}}],
  "potential_impact": "Risks and affected areas",
  "suggested_reviewers": ["expertise area"],
  "technical_details": "Implementation notes"
}}

Every changed file should appear in exactly one file group."""


def build_readme_prompt(
    info: RepositoryInfo,
    structure: str,
    files: Mapping[str, str],
    limit: int = DEFAULT_MAX_FILE_CHARS,
) -> str:
    return f"""Write a README.md for this repository.

{_repository_block(info)}

Structure:
{truncate(structure, limit)}

Key files:
{_files_block(files, limit)}

Include a title, description, features, installation, usage and contribution sections. Return only Markdown."""


def build_dockerfile_prompt(info: RepositoryInfo, language: str, structure: str, files: Mapping[str, str]) -> str:
    return f"""Write a production-ready Dockerfile for this {language} project.

{_repository_block(info)}

Structure:
{truncate(structure)}

Build files:
{_files_block(files, DEFAULT_MAX_FILE_CHARS)}

Use a multi-stage build where it helps, a non-root user and a minimal base image. Return only the Dockerfile."""


def build_code_comments_prompt(code: str, language: str, file_path: str) -> str:
    return f"""Add clear, idiomatic documentation comments to this {language} file ({file_path}).
Do not change behaviour. Return only the complete commented file.

```
{truncate(code, DEFAULT_MAX_FILE_CHARS * 2)}
```"""


def build_code_refactor_prompt(code: str, language: str, file_path: str, instructions: str = "") -> str:
    extra = f"\nInstructions: {instructions}\n" if instructions else ""
    return f"""Refactor this {language} file ({file_path}) for readability and maintainability without changing behaviour.
{extra}
```
{truncate(code, DEFAULT_MAX_FILE_CHARS * 2)}
```

Return only the complete refactored file."""


def build_code_search_prompt(query: str, results: List[Dict[str, str]]) -> str:
    listing = "\n".join(f"- {r.get('path', '')}" for r in results) or "No matches"
    return f"""A developer searched a repository for "{query}". These files matched:
{listing}

Explain briefly which files are most likely relevant and why."""


_OPERATION_INSTRUCTIONS = {
    "summarize": "Summarize the following content concisely.",
    "explain": "Explain the following content clearly for a developer.",
    "review": "Review the following code. List bugs, risks and improvements.",
    "document": "Write documentation for the following code.",
}


def build_llm_operation_prompt(operation_type: str, content: str, options: Optional[Dict[str, Any]] = None) -> str:
    instruction = _OPERATION_INSTRUCTIONS[operation_type]
    extras = "\n".join(f"{key}: {value}" for key, value in (options or {}).items())
    if extras:
        instruction = f"{instruction}\nOptions:\n{extras}"
    return f"{instruction}\n\n{truncate(content, DEFAULT_MAX_FILE_CHARS * 2)}"
