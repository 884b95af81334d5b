# =============================================================================
# core/models.py  —  Data Models (the "nouns" of the adapter)
# =============================================================================
#
# Two families of models live here:
#
#   1. Plain dataclasses for the records the adapter itself builds:
#        ToolRequest, TextItem, ContentEnvelope, AnalyticsMessage,
#        AnalyticsLogEntry.
#
#   2. Pydantic models for the structure the upstream RAG model is asked to
#      produce (RAGDocument, RAGResponse).  The OpenAI SDK turns these into
#      a JSON-schema response format and parses the reply back into them.
#
# OPEN RECORDS:
#   RAGDocument and RAGResponse use extra="allow".  Vendor-added keys are
#   kept on the model and written back out on serialization, so nothing the
#   upstream sends is silently dropped.
# =============================================================================

from dataclasses import dataclass, field
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


# -----------------------------------------------------------------------------
# ToolRequest: one tool invocation, as received from the MCP client
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ToolRequest:
    """A single tool invocation: which operation, with which arguments."""

    operation_name: str
    parameters: dict[str, Any] = field(default_factory=dict)


# -----------------------------------------------------------------------------
# RAG documents: the schema handed to the upstream "structured" completion
# -----------------------------------------------------------------------------
class RAGDocument(BaseModel):
    """One retrieved source document.

    ``type``/``source``/``title``/``context`` follow Anthropic's citation
    shape; ``record_type`` and ``url`` are Inkeep-specific.  Any other key
    the upstream adds is preserved.
    """

    model_config = ConfigDict(extra="allow")

    type: str
    source: dict[str, Any]
    title: Optional[str] = None
    context: Optional[str] = None
    record_type: Optional[str] = None
    url: Optional[str] = None


class RAGResponse(BaseModel):
    """The ordered list of documents returned for a search query."""

    model_config = ConfigDict(extra="allow")

    content: list[RAGDocument]

    def to_json(self) -> str:
        # exclude_unset keeps exactly the keys the upstream sent (extras included)
        return self.model_dump_json(exclude_unset=True)


# -----------------------------------------------------------------------------
# ContentEnvelope: the uniform output of every tool
# -----------------------------------------------------------------------------
# An empty envelope means "nothing found".  It is also what every failure
# path returns, so a calling assistant never sees an error object.
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class TextItem:
    """A single plain-text content item."""

    text: str
    type: str = "text"


@dataclass(frozen=True)
class ContentEnvelope:
    """Ordered list of content items returned by a tool."""

    content: list[TextItem] = field(default_factory=list)

    @classmethod
    def empty(cls) -> "ContentEnvelope":
        return cls(content=[])

    @classmethod
    def of_text(cls, text: str) -> "ContentEnvelope":
        return cls(content=[TextItem(text=text)])

    @property
    def is_empty(self) -> bool:
        return not self.content

    def to_dict(self) -> dict:
        return {"content": [{"type": item.type, "text": item.text} for item in self.content]}


# -----------------------------------------------------------------------------
# Analytics: the conversation log sent after a successful QA answer
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class AnalyticsMessage:
    role: str                          # "user" or "assistant"
    content: str


@dataclass(frozen=True)
class AnalyticsLogEntry:
    """A user/assistant exchange plus optional free-form properties."""

    messages: list[AnalyticsMessage]
    properties: Optional[dict[str, Any]] = None
    user_properties: Optional[dict[str, Any]] = None

    @classmethod
    def for_exchange(cls, question: str, answer: str, **properties: Any) -> "AnalyticsLogEntry":
        return cls(
            messages=[
                AnalyticsMessage(role="user", content=question),
                AnalyticsMessage(role="assistant", content=answer),
            ],
            properties=properties or None,
        )

    def to_payload(self) -> dict[str, Any]:
        """Build the JSON body expected by the analytics ``/conversations`` endpoint."""
        payload: dict[str, Any] = {
            "type": "openai",
            "messages": [{"role": m.role, "content": m.content} for m in self.messages],
        }
        if self.properties:
            payload["properties"] = self.properties
        if self.user_properties:
            payload["userProperties"] = self.user_properties
        return payload
