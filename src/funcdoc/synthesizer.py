"""Documentation synthesis.

``synthesize`` is deterministic: the same FunctionRecord always produces
the same DocumentationResult. ``document_function`` optionally lets a remote
documenter replace that output, falling back to it on any failure.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING, Iterable

from .analyzers import (
    generate_description,
    generate_functionality,
    generate_parameter_docs,
    generate_returns,
    generate_steps,
    generate_title,
)
from .exceptions import RemoteDocumentationError
from .models import DocumentationResult, FunctionRecord

if TYPE_CHECKING:
    from .remote import RemoteDocumenter

log = logging.getLogger(__name__)


def synthesize(func: FunctionRecord) -> DocumentationResult:
    """Run every analyzer over one function."""
    return DocumentationResult(
        title=generate_title(func),
        description=generate_description(func),
        functionality=tuple(generate_functionality(func)),
        parameters=tuple(generate_parameter_docs(func)),
        steps=tuple(generate_steps(func)),
        returns=generate_returns(func),
    )


def document_function(
    func: FunctionRecord,
    remote: RemoteDocumenter | None = None,
) -> DocumentationResult:
    """Document a function, preferring the remote source when one is given.

    The remote result is taken whole or not at all: on
    RemoteDocumentationError the synthesized result is returned instead.
    """
    if remote is None:
        return synthesize(func)

    try:
        return remote.document(func)
    except RemoteDocumentationError as e:
        log.warning(f"Remote documentation failed for {func.name}, using heuristics: {e}")
        return synthesize(func)


def document_all(
    functions: Iterable[FunctionRecord],
    remote: RemoteDocumenter | None = None,
    max_workers: int | None = None,
) -> list[tuple[FunctionRecord, DocumentationResult]]:
    """Document a batch of functions, preserving input order."""
    functions = list(functions)
    if remote is None:
        return [(func, synthesize(func)) for func in functions]

    # Remote calls block on the network; run them side by side
    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        results = list(pool.map(lambda f: document_function(f, remote), functions))
    return list(zip(functions, results))
