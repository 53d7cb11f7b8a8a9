"""
MCP tool implementations.

- dictation - Keys, exercises, answer entry, grading and MIDI export
"""

from chuk_mcp_dictation.tools.dictation import register_dictation_tools

__all__ = [
    "register_dictation_tools",
]
