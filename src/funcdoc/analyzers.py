"""Heuristic analyzers that derive documentation fields from a function.

Each analyzer is a pure function of a FunctionRecord. None of them raise
and every one falls back to generic text when its signals are missing.
"""

from __future__ import annotations

import logging
import math
import re

from .docstrings import find_param_entry, first_paragraph, returns_section
from .models import FunctionRecord, Parameter, ParameterDoc

log = logging.getLogger(__name__)

# (substrings, clause), first match wins, case-sensitive
_TYPE_CLAUSES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("str",), "containing text information"),
    (("int",), "specifying a numeric value"),
    (("float",), "specifying a decimal value"),
    (("bool",), "indicating whether to enable this feature"),
    (("list", "List"), "containing multiple items"),
    (("dict", "Dict"), "with key-value configuration"),
    (("Callable",), "function to be executed"),
)

_OPTIONAL_TYPE = re.compile(r"Optional\[(.*)\]")

_RETURN_EXPR = re.compile(r"\breturn\b[ \t]+(.*?)(?:$|#)", re.MULTILINE)

RETURNS_DICT = "Returns a dictionary containing the processed data."
RETURNS_LIST = "Returns a list of processed elements."
RETURNS_BOOL = "Returns a boolean indicating success or failure of the operation."
RETURNS_NUMBER = "Returns a numeric value representing the computation result."
RETURNS_STRING = "Returns a string representation of the processed data."
RETURNS_GENERIC = "Returns the result of processing the input parameters."
RETURNS_NONE = "Returns the result of the computation."

STEP_FOR = "Iterate through items to process data."
STEP_WHILE = "Iterate through conditions to process data."
STEP_IF = "Evaluate conditions to determine processing path."
STEP_TRY = "Attempt operations with error handling."
STEP_RETURN = "Return the processed results."


def _name_words(name: str) -> list[str]:
    return [word for word in name.split("_") if word]


def _capitalize(word: str) -> str:
    """Upper-case the first character only; ``HTTPServer`` stays as is."""
    return word[:1].upper() + word[1:]


def format_function_name(name: str) -> str:
    """Convert snake_case to Title Case Words."""
    return " ".join(_capitalize(word) for word in _name_words(name))


def generate_title(func: FunctionRecord) -> str:
    return f"{format_function_name(func.name)} Function Documentation"


def generate_description(func: FunctionRecord) -> str:
    """Use the docstring summary, or describe the function from its name."""
    summary = first_paragraph(func.docstring)
    if summary:
        return summary

    words = " ".join(_name_words(func.name))
    return (
        f"A function named {words} that processes the given inputs "
        "and returns results based on the specified parameters."
    )


def generate_functionality(func: FunctionRecord) -> list[str]:
    """List what the function does, judged from substrings of its source.

    Claims are independent and always come out in the same order.
    """
    code = func.source.lower()
    claims: list[str] = []

    if "json.loads" in code or "json.dumps" in code:
        claims.append("Processes JSON data for serialization or deserialization.")
    if "for " in code and "in " in code:
        claims.append("Iterates through collections to process multiple items.")
    if "try" in code and "except" in code:
        claims.append("Implements error handling for robust execution.")
    if "logging." in code:
        claims.append("Provides logging for debugging and monitoring.")
    if "return " in code:
        claims.append("Returns processed data to the caller.")
    if "dict(" in code or "{}" in code:
        claims.append("Organizes data using dictionary structures.")
    if "list(" in code or "[]" in code:
        claims.append("Manages collections of data using lists.")

    if not claims:
        action = func.name.replace("_", " ")
        claims.append(f"Processes input parameters to perform {action} operations.")
        claims.append("Returns results based on the given inputs.")

    return claims


def _any_in(text: str, needles: tuple[str, ...]) -> bool:
    return any(needle in text for needle in needles)


def normalize_type(type_text: str | None) -> str:
    """Resolve a declared annotation to a display type."""
    if not type_text:
        return "Any"
    return _OPTIONAL_TYPE.sub(r"\1 (Optional)", type_text, count=1)


def _type_clause(type_text: str) -> str:
    for needles, clause in _TYPE_CLAUSES:
        if _any_in(type_text, needles):
            return clause
    return "for processing"


def describe_parameter(param: Parameter, type_text: str) -> str:
    """Build a sentence for a parameter that has no docstring entry."""
    label = " ".join(_capitalize(word) for word in param.name.split("_"))
    description = f"{label} "
    if param.is_optional:
        description += f"(optional, default: {param.default}) "
    return description + _type_clause(type_text) + "."


def generate_parameter_docs(func: FunctionRecord) -> list[ParameterDoc]:
    """Document every parameter, in declaration order.

    An ``Args:`` entry in the docstring wins over synthesized text, and an
    explicit ``(type)`` in that entry wins over the annotation.
    """
    docs: list[ParameterDoc] = []
    for param in func.parameters:
        type_text = normalize_type(param.type)

        entry = find_param_entry(func.docstring, param.name) if func.docstring else None
        if entry and entry.description:
            docs.append(
                ParameterDoc(
                    name=param.name,
                    type=entry.type or type_text,
                    description=entry.description,
                )
            )
            continue

        docs.append(
            ParameterDoc(
                name=param.name,
                type=type_text,
                description=describe_parameter(param, type_text),
            )
        )
    return docs


def _body_lines(source: str) -> list[str]:
    """Source lines after the ``def`` line and a leading docstring block."""
    lines = source.split("\n")[1:]

    i = 0
    while i < len(lines) and not lines[i].strip():
        i += 1
    if i == len(lines):
        return []

    first = lines[i].strip()
    delimiter = first[:3]
    if delimiter in ('"""', "'''"):
        if delimiter in first[3:]:
            return lines[i + 1 :]
        for j in range(i + 1, len(lines)):
            if delimiter in lines[j]:
                return lines[j + 1 :]
        return []

    return lines[i:]


def _comment_text(line: str) -> str | None:
    """Return the text of a ``#`` comment on a line, ignoring ``#`` in strings."""
    quote = None
    i = 0
    while i < len(line):
        char = line[i]
        if quote:
            if char == "\\":
                i += 1
            elif line.startswith(quote, i):
                i += len(quote) - 1
                quote = None
        elif char == "#":
            return line[i + 1 :].strip()
        elif char in "'\"":
            quote = line[i : i + 3] if line[i : i + 3] in ('"""', "'''") else char
            i += len(quote) - 1
        i += 1
    return None


def _signal_step(line: str) -> str | None:
    if line.startswith("for "):
        return STEP_FOR
    if line.startswith("while "):
        return STEP_WHILE
    if line.startswith("if "):
        return STEP_IF
    if line.startswith("try:"):
        return STEP_TRY
    if line.startswith("return "):
        return STEP_RETURN
    return None


def generate_steps(func: FunctionRecord) -> list[str]:
    """Infer processing steps, in source order.

    Comments are the steps when there are at least two. Otherwise control
    flow keywords are added, each step text at most once, and a single
    comment keeps its place among them. With nothing at all, three (or two,
    without parameters) generic steps are returned.
    """
    lines = _body_lines(func.source)

    comments: list[tuple[int, str]] = []
    for i, line in enumerate(lines):
        text = _comment_text(line)
        if text and len(text) > 3:
            comments.append((i, text))

    if len(comments) >= 2:
        log.debug(f"{func.name}: {len(comments)} steps from comments")
        return [text for _, text in comments]

    comment_at = dict(comments)
    steps: list[str] = []
    seen: set[str] = set()
    for i, line in enumerate(lines):
        step = _signal_step(line.strip())
        if step and step not in seen:
            seen.add(step)
            steps.append(step)
        # A trailing comment follows the keyword on its own line
        if i in comment_at:
            steps.append(comment_at[i])

    if steps:
        log.debug(f"{func.name}: {len(steps)} steps from code structure")
        return steps

    action = func.name.replace("_", " ")
    steps = [f"Initialize processing for {action}."]
    if func.parameters:
        names = ", ".join(p.name for p in func.parameters)
        steps.append(f"Process input parameters: {names}.")
    steps.append("Perform core functionality and return results.")
    return steps


def _is_number(text: str) -> bool:
    """True for a finite numeric literal such as ``42``, ``3.5`` or ``0x1F``."""
    # float() also takes "inf", "nan" and "1_000"; none of those are literals here
    if "_" in text:
        return False
    try:
        return math.isfinite(float(text))
    except ValueError:
        pass
    try:
        int(text, 0)
    except ValueError:
        return False
    return True


def _classify_expression(expr: str) -> str | None:
    if "dict" in expr or expr.startswith("{"):
        return RETURNS_DICT
    if "list" in expr or expr.startswith("["):
        return RETURNS_LIST
    if "True" in expr or "False" in expr:
        return RETURNS_BOOL
    if _is_number(expr):
        return RETURNS_NUMBER
    if "str" in expr or expr.startswith(("'", '"')):
        return RETURNS_STRING
    return None


def _classify_annotation(annotation: str | None) -> str | None:
    """Classify a ``-> annotation`` when the expression says nothing."""
    if not annotation:
        return None
    if "dict" in annotation or "Dict" in annotation:
        return RETURNS_DICT
    if "list" in annotation or "List" in annotation:
        return RETURNS_LIST
    if "bool" in annotation:
        return RETURNS_BOOL
    if _any_in(annotation, ("int", "float", "complex", "Decimal")):
        return RETURNS_NUMBER
    if "str" in annotation:
        return RETURNS_STRING
    return None


def generate_returns(func: FunctionRecord) -> str:
    """Describe the return value.

    Prefers the docstring's ``Returns:`` section, then classifies the last
    ``return <expr>`` in the source, then the return annotation.
    """
    documented = returns_section(func.docstring)
    if documented:
        return documented

    expressions = _RETURN_EXPR.findall(func.source)
    if not expressions:
        return RETURNS_NONE

    last = expressions[-1].strip()
    return (
        _classify_expression(last)
        or _classify_annotation(func.return_type)
        or RETURNS_GENERIC
    )
