"""Function extraction from raw Python source text.

This is a lexical scan, not a parser. A function is ``def``, an identifier,
a parenthesized parameter list, an optional ``-> annotation`` and a colon,
followed by a body that runs until the next line starting in column 0 (or
end of text). Known limitations that callers depend on:

- decorators and comments directly above a ``def`` are not captured
- indented methods are captured, and a method's body runs until the next
  column-0 line, so later methods of the same class are part of it
- a column-0 comment or decorator ends the previous function
- a ``def`` whose body is only whitespace swallows the next column-0 line

Column-0 lines inside a triple-quoted string do not end a body.
"""

from __future__ import annotations

import logging
import re
import uuid
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Iterable

from .exceptions import SourceReadError
from .models import ExtractionResult, FunctionRecord
from .parameters import parse_parameters

log = logging.getLogger(__name__)

_DEF = re.compile(r"(?<![A-Za-z0-9_])def\s+([A-Za-z_][A-Za-z0-9_]*)\s*\(")
_ARROW = re.compile(r"\s*->")
_DOCSTRING = re.compile(r"^\s*(?:'''(.*?)'''|\"\"\"(.*?)\"\"\")", re.DOTALL)
_WHITESPACE = " \t\n\r\f\v"


class _Scanner:
    """Forward scanner over one source unit.

    Each call to ``next_function`` resumes where the previous match ended,
    moving through three stages: seek ``def``, capture signature, capture
    body until dedent.
    """

    def __init__(self, text: str):
        self.text = text
        self.pos = 0

    def next_function(self) -> tuple[str, str, str | None, str, int, int] | None:
        """Return (name, params, return_type, body, start, end) of the next match."""
        while True:
            match = _DEF.search(self.text, self.pos)
            if match is None:
                return None

            header = self._scan_signature(match.end())
            if header is None:
                # Not a definition; resume just after this "def"
                self.pos = match.start() + 1
                continue

            params_end, arrow_end, colon = header
            body_start = self._skip_whitespace(colon + 1)
            body_end = self._scan_body(body_start)
            self.pos = body_end

            return_type = None
            if arrow_end is not None:
                return_type = self.text[arrow_end:colon].strip() or None

            return (
                match.group(1),
                self.text[match.end() : params_end],
                return_type,
                self.text[body_start:body_end],
                match.start(),
                body_end,
            )

    def _scan_signature(self, params_start: int) -> tuple[int, int | None, int] | None:
        """Find the closing paren and the colon that ends the header.

        Tries each ``)`` in turn, so one level of nested parens in defaults
        survives as long as the outer ``)`` is followed by ``:`` or ``->``.
        """
        text = self.text
        close = text.find(")", params_start)
        while close != -1:
            after = close + 1
            if text.startswith(":", after):
                return close, None, after
            arrow = _ARROW.match(text, after)
            if arrow:
                colon = text.find(":", arrow.end())
                if colon != -1:
                    return close, arrow.end(), colon
            close = text.find(")", after)
        return None

    def _skip_whitespace(self, pos: int) -> int:
        text = self.text
        while pos < len(text) and text[pos] in _WHITESPACE:
            pos += 1
        return pos

    def _scan_body(self, pos: int) -> int:
        """Return the index of the newline that ends the body, or len(text)."""
        text = self.text
        length = len(text)
        while pos < length:
            char = text[pos]
            if char == "\n":
                if pos + 1 < length and text[pos + 1] not in _WHITESPACE:
                    return pos
                pos += 1
            elif char == "#":
                newline = text.find("\n", pos)
                pos = length if newline == -1 else newline
            elif text.startswith('"""', pos) or text.startswith("'''", pos):
                closing = text.find(text[pos : pos + 3], pos + 3)
                pos = length if closing == -1 else closing + 3
            elif char in "'\"":
                pos = self._skip_short_string(pos)
            else:
                pos += 1
        return length

    def _skip_short_string(self, pos: int) -> int:
        """Skip a single-line string literal; stops at end of line."""
        text = self.text
        quote = text[pos]
        pos += 1
        while pos < len(text):
            char = text[pos]
            if char == "\\":
                pos += 2
            elif char == quote:
                return pos + 1
            elif char == "\n":
                return pos
            else:
                pos += 1
        return len(text)


def _extract_docstring(body: str) -> str | None:
    """Return the leading triple-quoted literal of a body, stripped."""
    match = _DOCSTRING.match(body)
    if not match:
        return None
    content = match.group(1) if match.group(1) is not None else match.group(2)
    return content.strip()


def extract_functions(source: str, file_name: str = "<input>") -> list[FunctionRecord]:
    """Extract every function definition from a source unit.

    Args:
        source: Raw Python source text
        file_name: Origin label stored on each record

    Returns:
        FunctionRecords in source order. Empty if nothing matched.
    """
    scanner = _Scanner(source)
    functions: list[FunctionRecord] = []

    while True:
        found = scanner.next_function()
        if found is None:
            break
        name, params_text, return_type, body, start, end = found
        functions.append(
            FunctionRecord(
                id=str(uuid.uuid4()),
                name=name,
                source=source[start:end].strip(),
                parameters=parse_parameters(params_text),
                docstring=_extract_docstring(body),
                return_type=return_type,
                file_name=file_name,
            )
        )

    log.debug(f"Extracted {len(functions)} functions from {file_name}")
    return functions


def extract_file(path: Path, root: Path | None = None) -> list[FunctionRecord]:
    """Read a Python file and extract its functions.

    Raises:
        SourceReadError: If the file cannot be read or decoded
    """
    try:
        source = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SourceReadError(f"Failed to read {path}: {e}", path=str(path)) from e

    return extract_functions(source, _relative_path(path, root) if root else path.name)


def _relative_path(path: Path, root: Path) -> str:
    """Convert absolute path to relative from project root."""
    try:
        return str(path.relative_to(root))
    except ValueError:
        return str(path)


def collect_sources(paths: Iterable[Path]) -> list[Path]:
    """Expand directories into their ``*.py`` files, keeping input order."""
    files: list[Path] = []
    for path in paths:
        if path.is_dir():
            files.extend(sorted(p for p in path.rglob("*.py") if p.is_file()))
        else:
            files.append(path)
    return files


def extract_paths(
    paths: Iterable[Path],
    root: Path | None = None,
    max_workers: int | None = None,
) -> ExtractionResult:
    """Extract functions from files and directories.

    Units are independent, so they are read in a thread pool; results are
    concatenated in input order. Unreadable files are recorded in
    ``ExtractionResult.failed`` instead of aborting the batch.
    """
    files = collect_sources(paths)
    result = ExtractionResult()

    def _extract(path: Path) -> tuple[Path, list[FunctionRecord] | None, str | None]:
        try:
            return path, extract_file(path, root), None
        except SourceReadError as e:
            return path, None, str(e)

    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        for path, functions, error in pool.map(_extract, files):
            if error is not None:
                log.warning(error)
                result.failed[str(path)] = error
                continue
            result.files[str(path)] = len(functions or [])
            result.functions.extend(functions or [])

    return result
