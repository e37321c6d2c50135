# Tool domain models
# Catalog records supplied by the aggregator and their serializable projection

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class SchemaState(str, Enum):
    """Shape of a tool's input schema as seen by the search subsystem."""

    ABSENT = "absent"
    MAPPING = "mapping"
    UNREPRESENTABLE = "unrepresentable"


class Tool(BaseModel):
    """A tool aggregated from a backend MCP server."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., description="Tool name, unique within a catalog")
    category: str = Field(default="", description="Category or server group")
    description: str = Field(
        default="", description="Detailed description of tool functionality"
    )
    input_schema: Any = Field(
        default=None, alias="inputSchema", description="Opaque input schema"
    )
    server: str | None = Field(
        default=None, description="Backend server that provides the tool"
    )

    @property
    def schema_state(self) -> SchemaState:
        """Classify the input schema without raising."""
        if self.input_schema is None:
            return SchemaState.ABSENT
        if isinstance(self.input_schema, dict) and all(
            isinstance(key, str) for key in self.input_schema
        ):
            return SchemaState.MAPPING
        return SchemaState.UNREPRESENTABLE

    @property
    def parameters(self) -> dict[str, Any] | None:
        """The schema when it is a string-keyed mapping, otherwise None."""
        if self.schema_state is SchemaState.MAPPING:
            return self.input_schema
        return None

    def search_text(self) -> str:
        """Text blob used for embedding the tool."""
        return f"{self.name} {self.category} {self.description}"


class ToolMetadata(BaseModel):
    """Serializable projection of a Tool sent to external rankers."""

    name: str
    category: str = ""
    description: str = ""
    parameters: dict[str, Any] | None = None

    @classmethod
    def from_tool(cls, tool: Tool) -> "ToolMetadata":
        return cls(
            name=tool.name,
            category=tool.category,
            description=tool.description,
            parameters=tool.parameters,
        )

    def to_payload(self) -> dict[str, Any]:
        """Plain dict for JSON encoding; the schema is passed through untouched."""
        payload = self.model_dump(exclude={"parameters"})
        if self.parameters is not None:
            payload["parameters"] = self.parameters
        return payload
