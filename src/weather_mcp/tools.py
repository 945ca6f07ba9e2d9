"""Tool definitions and tool results."""

from __future__ import annotations

from collections.abc import Awaitable
from dataclasses import dataclass
from typing import Annotated, Any, Callable, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from weather_mcp.schema import (
    Schema,
    SchemaValidationError,
    ValidatedParams,
    validate,
)


class TextContent(BaseModel):
    """Plain text content block."""

    model_config = ConfigDict(extra="forbid")

    type: Literal["text"] = "text"
    text: str


class ImageContent(BaseModel):
    """Base64 encoded image content block."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    type: Literal["image"] = "image"
    data: str
    mime_type: str = Field(alias="mimeType")


ContentBlock = Annotated[Union[TextContent, ImageContent], Field(discriminator="type")]


class ToolResult(BaseModel):
    """Result produced by a tool handler.

    Attributes:
        content: Ordered content blocks, each renderable on its own.
        structured_content: Optional machine-readable copy of the payload.

    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    content: List[ContentBlock]
    structured_content: Optional[Dict[str, Any]] = Field(
        default=None, alias="structuredContent"
    )

    @classmethod
    def text(
        cls, text: str, structured_content: dict[str, Any] | None = None
    ) -> ToolResult:
        """Build a result holding a single text block."""
        return cls(
            content=[TextContent(text=text)], structured_content=structured_content
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the wire shape used in a ``result`` member."""
        return self.model_dump(by_alias=True, exclude_none=True)


ToolHandler = Callable[
    [Dict[str, Any]], Union[ToolResult, Dict[str, Any], Awaitable[ToolResult]]
]


@dataclass(frozen=True)
class ToolDefinition:
    """Description of a tool that can be registered with the server.

    Attributes:
        name: Unique name of the tool.
        description: Human-readable description of the tool purpose.
        schema: Declared shape of the tool parameters.
        handler: Callable that executes the tool logic. It receives validated
            parameters and returns a ToolResult, either directly or from a
            coroutine.
    """

    name: str
    description: str
    schema: Schema
    handler: ToolHandler

    def validate(self, parameters: Any) -> ValidatedParams | SchemaValidationError:
        """Validate incoming tool parameters against the declared schema."""

        return validate(self.schema, parameters)

    def metadata(self) -> Dict[str, Any]:
        """Return a discovery-friendly description of the tool."""

        return {
            "name": self.name,
            "description": self.description,
            "schema": self.schema.to_json_schema(),
        }

    def descriptor(self) -> Dict[str, Any]:
        """Return the tool as advertised by ``tools/list``."""

        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.schema.to_json_schema(),
        }
