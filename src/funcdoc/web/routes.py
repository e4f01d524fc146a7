import logging

from flask import Blueprint, Response, current_app, jsonify, request
from pydantic import ValidationError

from ..extractors import extract_functions
from ..generators import generate_batch_markdown, to_dict
from ..remote import RemoteDocumenter
from ..synthesizer import document_all
from .schemas import DocumentRequest, ExtractRequest

bp = Blueprint("api", __name__, url_prefix="/api")
log = logging.getLogger(__name__)


def _validation_error(e: ValidationError):
    return jsonify(
        {"error": "validation failed", "details": e.errors(include_context=False)}
    ), 400


def _remote():
    """Remote documenter for this app, or None when not configured."""
    config = current_app.config["FUNCDOC"]
    if not config.remote_ready:
        return None
    return RemoteDocumenter(config)


def _documented(data: DocumentRequest):
    functions = extract_functions(data.source, data.filename)
    if data.function is not None:
        functions = [f for f in functions if f.name == data.function]
        if not functions:
            return None
    return document_all(functions, remote=_remote())


@bp.post("/extract")
def extract():
    try:
        data = ExtractRequest.model_validate(request.get_json(silent=True) or {})
    except ValidationError as e:
        return _validation_error(e)

    functions = extract_functions(data.source, data.filename)
    log.info(f"Extracted {len(functions)} functions from {data.filename}")
    return jsonify({"functions": [to_dict(f)["function"] for f in functions]})


@bp.post("/document")
def document():
    try:
        data = DocumentRequest.model_validate(request.get_json(silent=True) or {})
    except ValidationError as e:
        return _validation_error(e)

    results = _documented(data)
    if results is None:
        return jsonify({"error": f"function {data.function!r} not found"}), 404

    return jsonify({"documents": [to_dict(func, doc) for func, doc in results]})


@bp.post("/export")
def export():
    try:
        data = DocumentRequest.model_validate(request.get_json(silent=True) or {})
    except ValidationError as e:
        return _validation_error(e)

    results = _documented(data)
    if results is None:
        return jsonify({"error": f"function {data.function!r} not found"}), 404

    return Response(generate_batch_markdown(results), mimetype="text/markdown")
