"""Remote documentation through an OpenAI-style chat completions API.

Optional. Callers go through ``synthesizer.document_function`` so that any
failure here falls back to the heuristic output.
"""

from __future__ import annotations

import json
import logging
import re

import requests as http_requests
from pydantic import BaseModel, Field, ValidationError

from .config import Config
from .exceptions import RemoteDocumentationError
from .models import DocumentationResult, FunctionRecord, ParameterDoc

log = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a technical documentation assistant that specializes in "
    "Python code analysis."
)

PROMPT_TEMPLATE = """
Please analyze this Python function and provide comprehensive documentation for it:

```python
{source}
```

Generate a JSON output with the following structure:
{{
  "title": "Human-readable title for the function",
  "description": "Brief description of what the function does",
  "functionality": ["List", "of", "key", "functionalities"],
  "parameters": [
    {{
      "name": "parameter_name",
      "type": "parameter_type",
      "description": "parameter description"
    }}
  ],
  "steps": ["Step 1 of the process", "Step 2 of the process"],
  "returns": "Description of what the function returns"
}}
"""

_FENCED_JSON = re.compile(r"```json\s*\n(.*?)\n```", re.DOTALL)
_FENCED = re.compile(r"```\s*\n(.*?)\n```", re.DOTALL)
_OBJECT = re.compile(r"\{.*\}", re.DOTALL)


class RemoteParameter(BaseModel):
    name: str = Field(min_length=1)
    type: str = "Any"
    description: str = ""


class RemoteDocumentation(BaseModel):
    title: str = Field(min_length=1)
    description: str
    functionality: list[str] = Field(min_length=1)
    parameters: list[RemoteParameter] = Field(default_factory=list)
    steps: list[str] = Field(min_length=1)
    returns: str = Field(min_length=1)


def extract_json(content: str) -> str:
    """Pull the JSON object out of a reply that may be fenced in markdown."""
    for pattern in (_FENCED_JSON, _FENCED):
        match = pattern.search(content)
        if match:
            return match.group(1)
    match = _OBJECT.search(content)
    return match.group(0) if match else content


def parse_reply(content: str, func: FunctionRecord) -> DocumentationResult:
    """Validate a model reply and convert it to a DocumentationResult.

    Raises:
        RemoteDocumentationError: If the reply is not valid documentation or
            its parameters don't line up with the function's
    """
    try:
        data = json.loads(extract_json(content))
    except json.JSONDecodeError as e:
        raise RemoteDocumentationError(f"Reply is not valid JSON: {e}") from e

    try:
        doc = RemoteDocumentation.model_validate(data)
    except ValidationError as e:
        raise RemoteDocumentationError(
            f"Reply does not match the documentation schema: {e.error_count()} errors"
        ) from e

    expected = [p.name for p in func.parameters]
    received = [p.name for p in doc.parameters]
    if received != expected:
        raise RemoteDocumentationError(
            f"Reply documents parameters {received}, expected {expected}"
        )

    return DocumentationResult(
        title=doc.title,
        description=doc.description,
        functionality=tuple(doc.functionality),
        parameters=tuple(
            ParameterDoc(name=p.name, type=p.type or "Any", description=p.description)
            for p in doc.parameters
        ),
        steps=tuple(doc.steps),
        returns=doc.returns,
    )


class RemoteDocumenter:
    """Documents functions by asking a chat completions endpoint.

    Args:
        config: Supplies the API key, URL, model, temperature and timeout
        session: HTTP session to use; a new ``requests.Session`` by default
    """

    def __init__(self, config: Config, session: http_requests.Session | None = None):
        self.config = config
        self.session = session or http_requests.Session()

    def _payload(self, func: FunctionRecord) -> dict:
        return {
            "model": self.config.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": PROMPT_TEMPLATE.format(source=func.source)},
            ],
            "temperature": self.config.temperature,
        }

    def document(self, func: FunctionRecord) -> DocumentationResult:
        """Request documentation for one function.

        Raises:
            RemoteDocumentationError: On a missing key, transport or HTTP
                error, or an unusable reply
        """
        if not self.config.api_key:
            raise RemoteDocumentationError("API key is required for remote documentation")

        try:
            response = self.session.post(
                self.config.api_url,
                json=self._payload(func),
                headers={"Authorization": f"Bearer {self.config.api_key}"},
                timeout=self.config.timeout,
            )
        except http_requests.RequestException as e:
            log.exception("Remote documentation request failed")
            raise RemoteDocumentationError(f"Request failed: {e}") from e

        if not response.ok:
            raise RemoteDocumentationError(
                f"API error: {response.status_code} - {response.text[:200]}",
                status_code=response.status_code,
            )

        try:
            content = response.json()["choices"][0]["message"]["content"] or ""
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise RemoteDocumentationError(f"Unexpected API response: {e}") from e

        log.debug(f"Remote documentation received for {func.name}")
        return parse_reply(content, func)
