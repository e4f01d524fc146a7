"""Parameter list decomposition.

Splits the raw text between a function's parentheses into Parameter
records. Commas are not balanced against brackets, so an annotation like
``Dict[str, int]`` is split in two.
"""

from __future__ import annotations

from .models import Parameter

# Receivers are never documented
_SKIPPED = frozenset({"self", "cls"})


def parse_parameters(params_text: str) -> tuple[Parameter, ...]:
    """Decompose a raw parameter list into Parameter records.

    Args:
        params_text: Text between the parentheses of a ``def``, may be empty

    Returns:
        Parameters in declaration order. Empty fragments and ``self``/``cls``
        are dropped.
    """
    if not params_text.strip():
        return ()

    params: list[Parameter] = []
    for fragment in params_text.split(","):
        fragment = fragment.strip()
        if not fragment or fragment in _SKIPPED:
            continue
        params.append(_parse_fragment(fragment))

    return tuple(params)


def _parse_fragment(fragment: str) -> Parameter:
    """Parse one ``name: type = default`` fragment."""
    name_part = fragment
    default = None

    if "=" in fragment:
        name_part, default = fragment.split("=", 1)
        default = default.strip()

    annotation = None
    if ":" in name_part:
        name_part, annotation = name_part.split(":", 1)
        annotation = annotation.strip()

    return Parameter(
        name=name_part.strip(),
        type=annotation,
        default=default,
        is_optional=default is not None,
    )
