"""
rules_enforcer.mcp_server.server - MCP server exposing the rules document

Registers on a low-level ``mcp.server.Server``:
- Resources: ``rules://current`` (markdown)
- Prompts: ``__auto_inject_system_rules__``, ``auto_inject_rules``,
  ``inject_rules_manual``

No tools are exposed.
"""

from __future__ import annotations

from mcp.server import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.types import GetPromptResult, Prompt, Resource
from pydantic.networks import AnyUrl

from rules_enforcer.config.logging import get_logger
from rules_enforcer.config.settings import SERVER_VERSION, RulesSettings
from rules_enforcer.store import RulesStore

from .handlers import (
    PROMPT_DESCRIPTIONS,
    RULES_MIME_TYPE,
    RULES_RESOURCE_NAME,
    RULES_URI,
    RulesHandlers,
)

logger = get_logger("rules_enforcer.mcp_server")


class RulesMCPServer:
    """
    Zero-tool MCP server serving one rules file.

    Owns the ``RulesStore``; the store is created once here and shared by
    every handler for the lifetime of the process.
    """

    def __init__(self, settings: RulesSettings, store: RulesStore | None = None):
        self._settings = settings
        self._store = store or RulesStore(settings.rules_path)
        self._handlers = RulesHandlers(self._store, settings)
        self._app = Server(settings.server_name, version=SERVER_VERSION)
        self._register_handlers()

    @property
    def app(self) -> Server:
        return self._app

    @property
    def settings(self) -> RulesSettings:
        return self._settings

    @property
    def store(self) -> RulesStore:
        return self._store

    @property
    def handlers(self) -> RulesHandlers:
        return self._handlers

    def _register_handlers(self) -> None:
        @self._app.list_resources()
        async def list_resources() -> list[Resource]:
            return [
                Resource(
                    uri=AnyUrl(RULES_URI),
                    name=RULES_RESOURCE_NAME,
                    description=f"Current rules from {self._settings.rules_path}",
                    mimeType=RULES_MIME_TYPE,
                )
            ]

        @self._app.read_resource()
        async def read_resource(uri: AnyUrl) -> list[ReadResourceContents]:
            if str(uri) != RULES_URI:
                raise ValueError(f"Resource not found: {uri}")
            return [
                ReadResourceContents(content=self._handlers.read_rules(), mime_type=RULES_MIME_TYPE)
            ]

        @self._app.list_prompts()
        async def list_prompts() -> list[Prompt]:
            return [
                Prompt(name=name, description=description)
                for name, description in PROMPT_DESCRIPTIONS.items()
            ]

        @self._app.get_prompt()
        async def get_prompt(name: str, arguments: dict[str, str] | None = None) -> GetPromptResult:
            logger.debug("Prompt requested", prompt=name)
            return self._handlers.get_prompt(name)

    def preload(self) -> bool:
        """Load the rules once at startup and log the outcome.

        Returns:
            True if the rules file was loaded.
        """
        result = self._store.get()
        if result.ok:
            logger.info("✅ Rules loaded successfully")
            return True
        logger.warning(f"⚠️ {result.text.splitlines()[0]}")
        return False


__all__ = ["RulesMCPServer"]
