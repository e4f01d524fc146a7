from pydantic import BaseModel, Field


class ExtractRequest(BaseModel):
    source: str
    filename: str = Field(default="<input>", min_length=1, max_length=255)


class DocumentRequest(ExtractRequest):
    function: str | None = Field(default=None, max_length=255)
