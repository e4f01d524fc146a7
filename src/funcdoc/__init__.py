"""Heuristic documentation for Python functions.

Extracts function definitions from raw source text without parsing or
executing it, then synthesizes readable documentation from each function's
name, signature, docstring and body.
"""

from funcdoc.exceptions import (
    ConfigError,
    FuncdocError,
    RemoteDocumentationError,
    SourceReadError,
)
from funcdoc.extractors import extract_file, extract_functions, extract_paths
from funcdoc.models import (
    DocumentationResult,
    ExtractionResult,
    FunctionRecord,
    Parameter,
    ParameterDoc,
    ValidationResult,
)
from funcdoc.parameters import parse_parameters
from funcdoc.synthesizer import document_all, document_function, synthesize

__all__ = [
    "ConfigError",
    "DocumentationResult",
    "ExtractionResult",
    "FuncdocError",
    "FunctionRecord",
    "Parameter",
    "ParameterDoc",
    "RemoteDocumentationError",
    "SourceReadError",
    "ValidationResult",
    "document_all",
    "document_function",
    "extract_file",
    "extract_functions",
    "extract_paths",
    "parse_parameters",
    "synthesize",
]
