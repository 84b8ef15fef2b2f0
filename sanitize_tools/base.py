"""Tool definition.

A tool is a named, described text transformation with declared input and
output shapes. Tools are data only; execution lives in the executor.
"""

from pydantic import BaseModel, ConfigDict

from sanitize_tools.schemas import SanitizeInput, ToolDescriptor, ToolResult


class Tool(BaseModel):
    """Immutable tool definition."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    input_schema: type[BaseModel] = SanitizeInput
    output_schema: type[BaseModel] = ToolResult

    def descriptor(self) -> ToolDescriptor:
        """Describe the tool with JSON schemas for its shapes."""
        return ToolDescriptor(
            name=self.name,
            description=self.description,
            input_schema=self.input_schema.model_json_schema(),
            output_schema=self.output_schema.model_json_schema(),
        )
