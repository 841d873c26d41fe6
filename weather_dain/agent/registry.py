"""Declarative registrations exposed to the agent platform.

Three kinds exist and each keeps its own interface:

* ``ToolDefinition`` - schema-declared callable priced per use.
* ``ContextDefinition`` - read-only text injected into the agent's context.
* ``PinnableDefinition`` - an on-demand UI widget pinned in the client.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Type

from langchain_core.tools import BaseTool, StructuredTool
from pydantic import BaseModel

from ..domain.errors import UnknownRegistration
from ..schemas import AgentInfo, Pricing, ServiceMetadata, ToolResult


ToolHandler = Callable[[BaseModel, AgentInfo], ToolResult]
ContextHandler = Callable[[AgentInfo], str]
WidgetHandler = Callable[[AgentInfo], ToolResult]


@dataclass(frozen=True)
class ToolDefinition:
    id: str
    name: str
    description: str
    input_model: Type[BaseModel]
    output_model: Type[BaseModel]
    handler: ToolHandler
    pricing: Pricing = field(default_factory=Pricing)

    def invoke(self, agent: AgentInfo, payload: Mapping[str, Any]) -> ToolResult:
        """Validate ``payload`` against the input model and run the handler."""
        params = self.input_model.model_validate(dict(payload))
        return self.handler(params, agent)

    def as_langchain_tool(self, agent: AgentInfo) -> BaseTool:
        def _run(**kwargs: Any) -> Dict[str, Any]:
            return self.invoke(agent, kwargs).model_dump(mode="json")

        return StructuredTool.from_function(
            func=_run,
            name=self.id.replace("-", "_"),
            description=self.description,
            args_schema=self.input_model,
        )

    def describe(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "input": self.input_model.model_json_schema(),
            "output": self.output_model.model_json_schema(by_alias=True),
            "pricing": self.pricing.model_dump(by_alias=True),
        }


@dataclass(frozen=True)
class ContextDefinition:
    id: str
    name: str
    description: str
    provider: ContextHandler

    def get_context(self, agent: AgentInfo) -> str:
        return self.provider(agent)

    def describe(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "description": self.description}


@dataclass(frozen=True)
class PinnableDefinition:
    id: str
    name: str
    description: str
    label: str
    icon: str
    provider: WidgetHandler
    type: str = "button"

    def get_widget(self, agent: AgentInfo) -> ToolResult:
        return self.provider(agent)

    def describe(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "type": self.type,
            "label": self.label,
            "icon": self.icon,
        }


class ServiceRegistry:
    def __init__(
        self, metadata: ServiceMetadata, api_key_configured: bool = False
    ) -> None:
        self.metadata = metadata
        self.api_key_configured = api_key_configured
        self._tools: Dict[str, ToolDefinition] = {}
        self._contexts: Dict[str, ContextDefinition] = {}
        self._pinnables: Dict[str, PinnableDefinition] = {}

    @staticmethod
    def _add(index: Dict[str, Any], kind: str, item: Any) -> None:
        if item.id in index:
            raise ValueError(f"duplicate {kind} id: {item.id}")
        index[item.id] = item

    def register_tool(self, tool: ToolDefinition) -> None:
        self._add(self._tools, "tool", tool)

    def register_context(self, context: ContextDefinition) -> None:
        self._add(self._contexts, "context", context)

    def register_pinnable(self, pinnable: PinnableDefinition) -> None:
        self._add(self._pinnables, "pinnable", pinnable)

    def get_tool(self, tool_id: str) -> ToolDefinition:
        try:
            return self._tools[tool_id]
        except KeyError:
            raise UnknownRegistration("tool", tool_id) from None

    def get_context(self, context_id: str) -> ContextDefinition:
        try:
            return self._contexts[context_id]
        except KeyError:
            raise UnknownRegistration("context", context_id) from None

    def get_pinnable(self, pinnable_id: str) -> PinnableDefinition:
        try:
            return self._pinnables[pinnable_id]
        except KeyError:
            raise UnknownRegistration("pinnable", pinnable_id) from None

    @property
    def tools(self) -> List[ToolDefinition]:
        return list(self._tools.values())

    @property
    def contexts(self) -> List[ContextDefinition]:
        return list(self._contexts.values())

    @property
    def pinnables(self) -> List[PinnableDefinition]:
        return list(self._pinnables.values())

    def langchain_tools(self, agent: AgentInfo) -> List[BaseTool]:
        """Tools bound to ``agent`` for use inside a LangChain agent loop."""
        return [tool.as_langchain_tool(agent) for tool in self._tools.values()]

    def describe(self) -> Dict[str, Any]:
        return {
            "metadata": self.metadata.model_dump(),
            "identity": {"apiKeyConfigured": self.api_key_configured},
            "tools": [tool.describe() for tool in self._tools.values()],
            "contexts": [ctx.describe() for ctx in self._contexts.values()],
            "pinnables": [pin.describe() for pin in self._pinnables.values()],
        }
