"""Docstring section lookup shared by the analyzers.

Understands Google-style headers (``Args:``, ``Parameters:``, ``Returns:``).
A section runs until a blank line, a sibling header or the end of the text.
"""

from __future__ import annotations

import re
import textwrap
from dataclasses import dataclass

# Headers that end the summary paragraph, even without a blank line before them
_PARAGRAPH_HEADERS = re.compile(
    r"^(?:Args|Arguments|Parameters|Returns|Examples?|Raises|Yields|Notes?):"
)

_ARGS_SECTION = re.compile(
    r"\b(?:Args|Parameters):(.*?)"
    r"(?=\n\s*\n|\n\s*(?:Returns|Examples?|Raises|Notes|Yields):|\Z)",
    re.IGNORECASE | re.DOTALL,
)

_RETURNS_SECTION = re.compile(
    r"\bReturns:(.*?)"
    r"(?=\n\s*\n|\n\s*(?:Args|Parameters|Examples?|Raises|Notes|Yields):|\Z)",
    re.IGNORECASE | re.DOTALL,
)

_PARAM_ENTRY = re.compile(
    r"\n\s*(\*{0,2}[A-Za-z0-9_]+)(\s*\([^)]+\))?:[ \t]*(.*?)"
    r"(?=\n\s*\*{0,2}[A-Za-z0-9_]+(?:\s*\([^)]+\))?:|\n\s*\n|\n\s*\Z|\Z)",
    re.DOTALL,
)


@dataclass(frozen=True)
class ParamEntry:
    """One ``name (type): description`` entry from an Args section."""

    name: str
    type: str | None
    description: str


def _section_text(body: str) -> str:
    """Section body without its shared indentation; nested lines keep theirs."""
    return textwrap.dedent(body).strip()


def first_paragraph(docstring: str | None) -> str:
    """Return the summary paragraph of a docstring as one line.

    Stops at the first blank line or at a section header line such as
    ``Returns:``, whichever comes first. Lines are joined with spaces.
    """
    if not docstring:
        return ""

    lines: list[str] = []
    for line in docstring.strip().split("\n"):
        stripped = line.strip()
        if _PARAGRAPH_HEADERS.match(stripped):
            break
        if not stripped:
            if lines:
                break
            continue
        lines.append(stripped)
    return " ".join(lines)


def args_section(docstring: str | None) -> str | None:
    """Return the raw body of the ``Args:``/``Parameters:`` section."""
    if not docstring:
        return None
    match = _ARGS_SECTION.search(docstring)
    return match.group(1) if match else None


def returns_section(docstring: str | None) -> str | None:
    """Return the dedented ``Returns:`` section, or None if absent or empty."""
    if not docstring:
        return None
    match = _RETURNS_SECTION.search(docstring)
    if not match:
        return None
    text = _section_text(match.group(1))
    return text or None


def parse_param_entries(docstring: str | None) -> dict[str, ParamEntry]:
    """Parse the per-parameter entries of the Args section.

    Returns:
        Mapping of parameter name (as written, ``*`` prefixes kept) to entry.
        A later entry for the same name replaces an earlier one.
    """
    section = args_section(docstring)
    if not section:
        return {}

    entries: dict[str, ParamEntry] = {}
    for match in _PARAM_ENTRY.finditer(section):
        name = match.group(1)
        type_text = match.group(2)
        if type_text:
            type_text = type_text.strip()[1:-1].strip() or None
        description = re.sub(r"\s+", " ", match.group(3)).strip()
        entries[name] = ParamEntry(name=name, type=type_text, description=description)
    return entries


def find_param_entry(docstring: str | None, name: str) -> ParamEntry | None:
    """Look up the Args entry for ``name``, ignoring ``*``/``**`` prefixes."""
    entries = parse_param_entries(docstring)
    if name in entries:
        return entries[name]
    bare = name.lstrip("*")
    for key, entry in entries.items():
        if key.lstrip("*") == bare:
            return entry
    return None
