"""
rules_enforcer/mcp_server/stdio.py
 STDIO transport runner

The process itself talks to the MCP client over stdin/stdout; all
diagnostics go to stderr. Ctrl-C / SIGTERM exit with status 0, a failed
transport start exits with status 1.
"""

from __future__ import annotations

import asyncio
import signal as _signal
import sys

from mcp.server.stdio import stdio_server

from rules_enforcer.config.logging import configure_logging, get_logger
from rules_enforcer.config.settings import RulesSettings

from .server import RulesMCPServer

log = get_logger("rules_enforcer.stdio")

EXIT_OK = 0
EXIT_TRANSPORT_FAILURE = 1


def _setup_signal_handler() -> None:
    """Exit cleanly on SIGINT/SIGTERM."""

    def signal_handler(*_args):
        log.info("👋 Shutting down MCP Rules Enforcer...")
        sys.exit(EXIT_OK)

    _signal.signal(_signal.SIGINT, signal_handler)
    _signal.signal(_signal.SIGTERM, signal_handler)


def log_startup(settings: RulesSettings) -> None:
    """Write the startup status lines to the diagnostic stream."""
    log.info(f"🚀 Starting {settings.server_name}")
    log.info(f"📁 RULE_ROOT: {settings.rule_root}")
    log.info(f"📄 Rules file path: {settings.rules_path}")
    log.info(f"🔄 Auto-injection: {'ENABLED' if settings.auto_inject else 'DISABLED'}")


async def serve(server: RulesMCPServer) -> None:
    """Run the MCP session over stdio until the client disconnects."""
    log.info("🔗 Connecting to MCP transport...")
    async with stdio_server() as (read_stream, write_stream):
        log.info("✅ MCP Rules Enforcer is running!")
        log.info("📡 Listening for MCP requests on stdio...")
        await server.app.run(
            read_stream,
            write_stream,
            server.app.create_initialization_options(),
        )


def run_stdio(settings: RulesSettings) -> int:
    """Start the server in stdio mode and block until it stops.

    Returns:
        Process exit status.
    """
    # stdout is the protocol stream.
    configure_logging(level=settings.log_level)
    _setup_signal_handler()
    log_startup(settings)

    server = RulesMCPServer(settings)
    server.preload()

    try:
        asyncio.run(serve(server))
    except KeyboardInterrupt:
        log.info("👋 Shutting down MCP Rules Enforcer...")
    except Exception as e:
        log.error(f"❌ Failed to start server: {e}")
        return EXIT_TRANSPORT_FAILURE
    return EXIT_OK


__all__ = ["EXIT_OK", "EXIT_TRANSPORT_FAILURE", "log_startup", "run_stdio", "serve"]
