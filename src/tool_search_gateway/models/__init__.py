# Domain models package

from .tool import SchemaState, Tool, ToolMetadata

__all__ = ["SchemaState", "Tool", "ToolMetadata"]
