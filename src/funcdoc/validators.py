"""Documentation validation and coverage checks."""

from __future__ import annotations

from typing import Iterable

from .models import DocumentationResult, FunctionRecord, ValidationResult


def validate_results(
    results: Iterable[tuple[FunctionRecord, DocumentationResult]],
    strict: bool = False,
) -> ValidationResult:
    """Validate documented functions.

    Checks:
    1. Functions should have a docstring (warning in normal mode, error in strict)
    2. Documentation must have functionality, steps and a returns description,
       and one parameter entry per parameter in the same order (always an error)

    Args:
        results: (function, documentation) pairs
        strict: If True, missing docstrings are errors instead of warnings

    Returns:
        ValidationResult with errors and warnings
    """
    result = ValidationResult()

    for func, doc in results:
        label = f"{func.file_name}:{func.name}"

        if not func.docstring:
            msg = f"{label}: missing docstring (documentation is inferred)"
            if strict:
                result.errors.append(msg)
            else:
                result.warnings.append(msg)

        if not doc.functionality:
            result.errors.append(f"{label}: no functionality claims")
        if not doc.steps:
            result.errors.append(f"{label}: no processing steps")
        if not doc.returns.strip():
            result.errors.append(f"{label}: empty returns description")

        expected = [p.name for p in func.parameters]
        documented = [p.name for p in doc.parameters]
        if documented != expected:
            result.errors.append(
                f"{label}: parameters documented as {documented}, declared {expected}"
            )

    return result


def compute_coverage(functions: Iterable[FunctionRecord]) -> float:
    """Fraction of functions with a docstring (0.0 - 1.0).

    Returns:
        1.0 when there are no functions
    """
    functions = list(functions)
    if not functions:
        return 1.0
    return sum(1 for f in functions if f.docstring) / len(functions)
