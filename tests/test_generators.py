"""Tests for markdown and JSON output."""

import json

from funcdoc.extractors import extract_functions
from funcdoc.generators import (
    _slugify,
    generate_batch_markdown,
    generate_function_markdown,
    generate_index_markdown,
    generate_json,
    to_dict,
)
from funcdoc.models import DocumentationResult, ParameterDoc
from funcdoc.synthesizer import synthesize


def make_doc(**overrides):
    values = {
        "title": "Add Function Documentation",
        "description": "Adds two numbers.",
        "functionality": ("Returns processed data to the caller.",),
        "parameters": (
            ParameterDoc("a", "int", "A specifying a numeric value."),
            ParameterDoc("b", "int", "B (optional, default: 5) specifying a numeric value."),
        ),
        "steps": ("Validate inputs.", "Return the processed results."),
        "returns": "Returns a numeric value.",
    }
    values.update(overrides)
    return DocumentationResult(**values)


def add_function():
    (func,) = extract_functions("def add(a: int, b: int = 5) -> int:\n    return a + b", "math.py")
    return func


class TestFunctionMarkdown:
    def test_sections_in_order(self):
        md = generate_function_markdown(add_function(), make_doc())

        headings = [line for line in md.splitlines() if line.startswith("#")]
        assert headings == [
            "# Add Function Documentation",
            "## Functionality",
            "## Parameters",
            "## Processing Steps",
            "## Returns",
            "## Source Code",
        ]

    def test_content(self):
        md = generate_function_markdown(add_function(), make_doc())

        assert "- Returns processed data to the caller." in md
        assert "- `b` (int): B (optional, default: 5) specifying a numeric value." in md
        assert "1. Validate inputs.\n2. Return the processed results." in md
        assert "```python\ndef add(a: int, b: int = 5) -> int:\n    return a + b\n```" in md
        assert "*Source: math.py*" in md

    def test_no_parameters(self):
        (func,) = extract_functions("def noop():\n    pass")
        md = generate_function_markdown(func, make_doc(parameters=()))
        assert "*No parameters.*" in md


class TestIndex:
    def test_links_and_escaping(self):
        func = add_function()
        doc = make_doc(description="Adds a | b\nquickly.")

        md = generate_index_markdown([(func, doc)])

        assert "# Function Reference" in md
        assert "| [`add`](#add-function-documentation) | math.py | Adds a \\| b quickly. |" in md

    def test_slugify(self):
        assert _slugify("Fetch User Data Function Documentation") == (
            "fetch-user-data-function-documentation"
        )
        assert _slugify("ParseHTTP Body (v2)") == "parsehttp-body-v2"


class TestBatch:
    def test_empty(self):
        md = generate_batch_markdown([])
        assert md.startswith("<!-- AUTO-GENERATED")
        assert "*No functions found.*" in md

    def test_functions_separated_by_rules(self):
        source = "def one():\n    return 1\n\n\ndef two():\n    return 2\n"
        results = [(f, synthesize(f)) for f in extract_functions(source)]

        md = generate_batch_markdown(results)

        assert md.count("\n---\n") == 2
        assert md.index("# One Function Documentation") < md.index("# Two Function Documentation")


class TestJson:
    def test_to_dict_without_documentation(self):
        data = to_dict(add_function())
        assert list(data) == ["function"]
        assert data["function"]["name"] == "add"
        assert data["function"]["parameters"][1] == {
            "name": "b",
            "type": "int",
            "default": "5",
            "is_optional": True,
        }

    def test_generate_json(self):
        func = add_function()

        (item,) = json.loads(generate_json([(func, make_doc())]))

        assert item["function"]["id"] == func.id
        assert item["function"]["return_type"] == "int"
        assert item["documentation"]["title"] == "Add Function Documentation"
        assert item["documentation"]["steps"] == [
            "Validate inputs.",
            "Return the processed results.",
        ]
