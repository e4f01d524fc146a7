"""Output generators for function documentation."""

from __future__ import annotations

import json
from dataclasses import asdict
from typing import Iterable

from .models import DocumentationResult, FunctionRecord

Documented = tuple[FunctionRecord, DocumentationResult]


def _slugify(name: str) -> str:
    """Convert a heading to a markdown anchor slug."""
    # GitHub-style: lowercase, drop punctuation, spaces to hyphens
    slug = "".join(c for c in name.lower() if c.isalnum() or c in " -_")
    return slug.replace(" ", "-")


def _escape_cell(text: str) -> str:
    return text.replace("|", "\\|").replace("\n", " ")


def generate_function_markdown(func: FunctionRecord, doc: DocumentationResult) -> str:
    """Render one function's documentation as a markdown document."""
    lines = [
        f"# {doc.title}",
        "",
        doc.description,
        "",
        "## Functionality",
        "",
    ]
    lines.extend(f"- {item}" for item in doc.functionality)
    lines.extend(["", "## Parameters", ""])

    if doc.parameters:
        for param in doc.parameters:
            lines.append(f"- `{param.name}` ({param.type or 'Any'}): {param.description}")
    else:
        lines.append("*No parameters.*")

    lines.extend(["", "## Processing Steps", ""])
    lines.extend(f"{i}. {step}" for i, step in enumerate(doc.steps, start=1))

    lines.extend(
        [
            "",
            "## Returns",
            "",
            doc.returns,
            "",
            "## Source Code",
            "",
            "```python",
            func.source,
            "```",
            "",
            f"*Source: {func.file_name}*",
            "",
        ]
    )
    return "\n".join(lines)


def generate_index_markdown(results: Iterable[Documented]) -> str:
    """Generate an index table linking to each function's section."""
    lines = [
        "# Function Reference",
        "",
        "| Function | File | Description |",
        "|----------|------|-------------|",
    ]
    for func, doc in results:
        slug = _slugify(doc.title)
        desc = _escape_cell(doc.description)
        lines.append(f"| [`{func.name}`](#{slug}) | {_escape_cell(func.file_name)} | {desc} |")
    lines.append("")
    return "\n".join(lines)


def generate_batch_markdown(results: Iterable[Documented]) -> str:
    """Render an index followed by every function, separated by rules."""
    results = list(results)
    parts = [
        "<!-- AUTO-GENERATED. DO NOT EDIT. Run `funcdoc` to regenerate. -->",
        "",
        generate_index_markdown(results),
    ]

    if not results:
        parts.append("*No functions found.*")
        parts.append("")
        return "\n".join(parts)

    for func, doc in results:
        parts.append("---")
        parts.append("")
        parts.append(generate_function_markdown(func, doc))
    return "\n".join(parts)


def to_dict(func: FunctionRecord, doc: DocumentationResult | None = None) -> dict:
    """Convert a function (and optionally its documentation) to plain data."""
    data = {"function": asdict(func)}
    if doc is not None:
        data["documentation"] = asdict(doc)
    return data


def generate_json(results: Iterable[Documented], indent: int | None = 2) -> str:
    """Serialize documented functions as a JSON array."""
    return json.dumps([to_dict(func, doc) for func, doc in results], indent=indent)
