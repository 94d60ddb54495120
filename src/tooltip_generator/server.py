# tooltip-generator - Unity tooltip attributes from XML documentation comments
# Copyright (C) 2026 Michael Doyle
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program. If not, see <https://www.gnu.org/licenses/>.

"""MCP server for tooltip generation.

Exposes project-wide tooltip generation as MCP tools so an agent can keep
Unity ``[Tooltip]`` attributes in sync with ``///`` summaries after
editing scripts.

Usage:
    PROJECT_ROOT=/path/to/unity/project python -m tooltip_generator.server

Environment:
    PROJECT_ROOT     Project to process (default: current directory).
    TOOLTIP_NEWLINE  "lf" or "crlf" for generated lines (default: platform).
"""

from __future__ import annotations

import fnmatch
import json
import os
import sys
import time
import traceback

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import Tool, TextContent
import mcp.types as types

from tooltip_generator.generator import TooltipGenerator
from tooltip_generator.models import ProcessingReport
from tooltip_generator.project_processor import ProjectProcessor

# ---------------------------------------------------------------------------
# Module-level state
# ---------------------------------------------------------------------------

server = Server("tooltip-generator")

_NEWLINES = {"lf": "\n", "crlf": "\r\n"}

_project_root: str = ""
_processor: ProjectProcessor | None = None

# Session usage stats
_session_start: float = time.time()
_tool_call_counts: dict[str, int] = {}
_files_updated: int = 0


def _log(message: str) -> None:
    print(f"[tooltip-generator] {message}", file=sys.stderr)


def _format_result(value: object) -> str:
    """Format a tool result as readable text."""
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list)):
        return json.dumps(value, indent=2, default=str)
    return str(value)


def _format_duration(seconds: float) -> str:
    """Format seconds into a human-readable duration."""
    if seconds < 60:
        return f"{seconds:.0f}s"
    minutes = int(seconds // 60)
    secs = int(seconds % 60)
    if minutes < 60:
        return f"{minutes}m {secs}s"
    hours = minutes // 60
    mins = minutes % 60
    return f"{hours}h {mins}m"


def _format_usage_stats() -> str:
    """Format session usage statistics."""
    elapsed = time.time() - _session_start
    lines = [
        f"Session duration: {_format_duration(elapsed)}",
        f"Total tool calls: {sum(_tool_call_counts.values())}",
        f"Files updated this session: {_files_updated}",
    ]
    if _tool_call_counts:
        lines.append("")
        lines.append("Calls by tool:")
        for tool_name, count in sorted(_tool_call_counts.items(), key=lambda x: -x[1]):
            lines.append(f"  {tool_name}: {count}")
    return "\n".join(lines)


def _resolve_newline() -> str:
    value = os.environ.get("TOOLTIP_NEWLINE", "").strip().lower()
    if not value:
        return os.linesep
    if value not in _NEWLINES:
        raise ValueError(f"TOOLTIP_NEWLINE must be 'lf' or 'crlf', got {value!r}")
    return _NEWLINES[value]


def _build_processor() -> None:
    """Create the project processor and scan for eligible classes."""
    global _project_root, _processor

    _project_root = os.environ.get("PROJECT_ROOT", os.getcwd())
    _log(f"Scanning project: {_project_root}")

    generator = TooltipGenerator(newline=_resolve_newline())
    _processor = ProjectProcessor(_project_root, generator=generator)
    names = _processor.refresh_eligible_names()
    _log(f"Found {len(names)} eligible classes")


def _report(report: ProcessingReport) -> dict:
    global _files_updated
    _files_updated += len(report.updated)
    return report.to_dict()


# ---------------------------------------------------------------------------
# Tool definitions
# ---------------------------------------------------------------------------

TOOLS = [
    Tool(
        name="generate_tooltips",
        description="Add or update [Tooltip] attributes from /// summaries in every C# script of the project.",
        inputSchema={
            "type": "object",
            "properties": {},
        },
    ),
    Tool(
        name="generate_tooltips_for_files",
        description="Add or update [Tooltip] attributes in the given C# scripts only.",
        inputSchema={
            "type": "object",
            "properties": {
                "paths": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "File paths relative to the project root.",
                },
            },
            "required": ["paths"],
        },
    ),
    Tool(
        name="generate_tooltips_changed",
        description="Add or update [Tooltip] attributes in scripts changed in git since a ref (default: the last run).",
        inputSchema={
            "type": "object",
            "properties": {
                "since_ref": {
                    "type": "string",
                    "description": "Git ref to diff against. Omit to use the commit of the last run.",
                },
            },
        },
    ),
    Tool(
        name="preview_tooltips",
        description="Return the given C# source with tooltips applied, without writing any file.",
        inputSchema={
            "type": "object",
            "properties": {
                "text": {
                    "type": "string",
                    "description": "C# source text.",
                },
            },
            "required": ["text"],
        },
    ),
    Tool(
        name="list_eligible_classes",
        description="List class names whose fields can carry tooltips. Optional glob pattern to filter.",
        inputSchema={
            "type": "object",
            "properties": {
                "pattern": {
                    "type": "string",
                    "description": "Glob pattern to filter class names (uses fnmatch).",
                },
                "max_results": {
                    "type": "integer",
                    "description": "Maximum number of results to return (0 = unlimited, default 0).",
                },
            },
        },
    ),
    Tool(
        name="refresh_eligible_classes",
        description="Rescan the project for MonoBehaviour, ScriptableObject and [Serializable] classes.",
        inputSchema={
            "type": "object",
            "properties": {},
        },
    ),
    Tool(
        name="get_usage_stats",
        description="Session stats: tool calls and files updated.",
        inputSchema={
            "type": "object",
            "properties": {},
        },
    ),
]


# ---------------------------------------------------------------------------
# MCP handlers
# ---------------------------------------------------------------------------


@server.list_tools()
async def list_tools() -> list[Tool]:
    return TOOLS


@server.call_tool()
async def call_tool(name: str, arguments: dict) -> list[types.TextContent]:
    _tool_call_counts[name] = _tool_call_counts.get(name, 0) + 1

    try:
        if name == "get_usage_stats":
            return [TextContent(type="text", text=_format_usage_stats())]

        if _processor is None:
            _build_processor()

        if name == "generate_tooltips":
            result = _report(_processor.process_all())

        elif name == "generate_tooltips_for_files":
            result = _report(_processor.process_paths(list(arguments["paths"])))

        elif name == "generate_tooltips_changed":
            result = _report(_processor.process_changed(arguments.get("since_ref")))

        elif name == "preview_tooltips":
            changed, text = _processor.generator.process(arguments["text"])
            result = text if changed else "No tooltip changes."

        elif name == "list_eligible_classes":
            names = sorted(_processor.generator.eligible_names)
            pattern = arguments.get("pattern")
            if pattern:
                names = [n for n in names if fnmatch.fnmatch(n, pattern)]
            max_results = arguments.get("max_results", 0)
            if max_results:
                names = names[:max_results]
            result = names

        elif name == "refresh_eligible_classes":
            names = _processor.refresh_eligible_names()
            result = f"Found {len(names)} eligible classes."

        else:
            return [TextContent(type="text", text=f"Error: unknown tool '{name}'")]

        return [TextContent(type="text", text=_format_result(result))]

    except Exception as e:
        tb = traceback.format_exc()
        _log(f"Error in {name}: {tb}")
        return [TextContent(type="text", text=f"Error: {e}")]


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


async def main():
    _build_processor()
    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options(),
        )


def main_sync():
    """Synchronous entry point for console_scripts."""
    import asyncio

    asyncio.run(main())


if __name__ == "__main__":
    main_sync()
