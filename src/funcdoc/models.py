"""Data models for function extraction and documentation synthesis."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Parameter:
    """One declared argument of a function."""

    name: str
    type: str | None = None  # Annotation exactly as written: "List[int]"
    default: str | None = None  # Default expression exactly as written
    is_optional: bool = False  # True iff default is present


@dataclass(frozen=True)
class FunctionRecord:
    """One function extracted from a source unit."""

    id: str  # Fresh uuid4, only used for selection
    name: str
    source: str  # Verbatim "def ..." through end of body
    parameters: tuple[Parameter, ...] = ()
    docstring: str | None = None
    return_type: str | None = None  # Text after "->", if annotated
    file_name: str = "<input>"


@dataclass(frozen=True)
class ParameterDoc:
    """Documentation for a single parameter."""

    name: str
    type: str
    description: str


@dataclass(frozen=True)
class DocumentationResult:
    """Synthesized documentation for one function."""

    title: str
    description: str
    functionality: tuple[str, ...]
    parameters: tuple[ParameterDoc, ...]
    steps: tuple[str, ...]
    returns: str


@dataclass
class ExtractionResult:
    """Functions extracted from a batch of source units."""

    functions: list[FunctionRecord] = field(default_factory=list)
    files: dict[str, int] = field(default_factory=dict)  # path -> functions found
    failed: dict[str, str] = field(default_factory=dict)  # path -> reason


@dataclass
class ValidationResult:
    """Results from documentation validation."""

    errors: list[str] = field(default_factory=list)  # Build fails if non-empty
    warnings: list[str] = field(default_factory=list)  # Printed but allowed
