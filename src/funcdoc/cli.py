"""Command-line documentation generator.

Extracts functions from Python files and writes one document per function:
    {output}/README.md   - Index with links to every function
    {output}/{name}.md   - Documentation for one function

Without --output the whole batch is printed to stdout.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .config import Config
from .exceptions import ConfigError
from .extractors import extract_paths
from .generators import (
    generate_batch_markdown,
    generate_function_markdown,
    generate_index_markdown,
    generate_json,
)
from .models import DocumentationResult, FunctionRecord
from .remote import RemoteDocumenter
from .synthesizer import document_all
from .validators import compute_coverage, validate_results

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="funcdoc",
        description="Generate documentation for the functions in Python source files",
    )
    parser.add_argument("paths", nargs="+", type=Path, help="files or directories")
    parser.add_argument("-o", "--output", type=Path, help="directory for markdown files")
    parser.add_argument(
        "--format", choices=("markdown", "json"), default="markdown", help="output format"
    )
    parser.add_argument("--function", help="only document functions with this name")
    parser.add_argument(
        "--remote", action="store_true", help="ask the configured API before falling back"
    )
    parser.add_argument(
        "--strict", action="store_true", help="treat missing docstrings as errors"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def _unique_names(results: list[tuple[FunctionRecord, DocumentationResult]]) -> list[str]:
    """File stems per function; repeated names get a numeric suffix."""
    seen: dict[str, int] = {}
    names = []
    for func, _ in results:
        count = seen.get(func.name, 0)
        seen[func.name] = count + 1
        names.append(func.name if count == 0 else f"{func.name}_{count + 1}")
    return names


def write_output(
    output_dir: Path,
    results: list[tuple[FunctionRecord, DocumentationResult]],
    fmt: str = "markdown",
) -> list[Path]:
    """Write documentation files into ``output_dir``.

    Returns:
        Paths written, index first
    """
    output_dir.mkdir(parents=True, exist_ok=True)

    if fmt == "json":
        path = output_dir / "functions.json"
        path.write_text(generate_json(results))
        return [path]

    written = []
    index = output_dir / "README.md"
    index.write_text(generate_index_markdown(results))
    written.append(index)

    for name, (func, doc) in zip(_unique_names(results), results):
        path = output_dir / f"{name}.md"
        path.write_text(generate_function_markdown(func, doc))
        written.append(path)
    return written


def main(argv: list[str] | None = None) -> int:
    """Generate documentation. Returns the process exit status."""
    args = build_parser().parse_args(argv)

    try:
        config = Config.from_env()
    except ConfigError as e:
        print(f"  ✗ {e}", file=sys.stderr)
        return 2

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    print("Extracting functions...", file=sys.stderr)
    extraction = extract_paths(args.paths)
    for path, reason in extraction.failed.items():
        print(f"  ✗ {reason}", file=sys.stderr)
    if not extraction.files:
        print("No readable source files.", file=sys.stderr)
        return 1

    for path, count in extraction.files.items():
        print(f"  ✓ {path}: {count} functions", file=sys.stderr)

    functions = extraction.functions
    if args.function:
        functions = [f for f in functions if f.name == args.function]

    remote = None
    if args.remote or config.remote_enabled:
        if config.api_key:
            remote = RemoteDocumenter(config)
        else:
            log.warning("Remote documentation enabled without an API key; using heuristics")

    results = document_all(functions, remote=remote)

    validation = validate_results(results, strict=args.strict)
    for warning in validation.warnings:
        log.debug(warning)
    coverage = compute_coverage(functions)
    print(f"\nDocstring coverage: {coverage:.0%}", file=sys.stderr)

    if args.output:
        for path in write_output(args.output, results, args.format):
            print(f"  {path}", file=sys.stderr)
    elif args.format == "json":
        print(generate_json(results))
    else:
        print(generate_batch_markdown(results))

    if validation.errors:
        print("\nValidation errors:", file=sys.stderr)
        for err in validation.errors:
            print(f"  ✗ {err}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
