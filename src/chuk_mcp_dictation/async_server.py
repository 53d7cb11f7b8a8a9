#!/usr/bin/env python3
"""
Async Dictation MCP Server using chuk-mcp-server

This server provides MCP tools for melodic dictation (ear training).
It generates short melodies in a chosen key, collects the learner's
transcription note by note and grades it.

The server provides tools for:
- Listing the supported keys
- Generating exercises and exporting them as MIDI for playback
- Entering and undoing answer notes and rests
- Grading answers as correct, incorrect or incomplete
"""

import logging
import os
from pathlib import Path

from chuk_mcp_server import ChukMCPServer

from chuk_mcp_dictation.config import load_settings
from chuk_mcp_dictation.dictation import SessionManager
from chuk_mcp_dictation.tools import register_dictation_tools

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Create the MCP server instance
mcp = ChukMCPServer("chuk-mcp-dictation")

# Settings file path and seed come from the entry point (--config, --seed)
CONFIG_PATH = os.environ.get("CHUK_DICTATION_CONFIG")
settings = load_settings(Path(CONFIG_PATH) if CONFIG_PATH else None)
SEED = os.environ.get("CHUK_DICTATION_SEED")
if SEED is not None:
    settings = settings.model_copy(update={"seed": int(SEED)})

# Paths - relative output dirs resolve against the working directory
OUTPUT_DIR = Path.cwd() / settings.output_dir

# Create managers
session_manager = SessionManager(settings)

# Register all tools
dictation_tools = register_dictation_tools(mcp, session_manager, OUTPUT_DIR)

# Export tool functions for direct access
dictation_list_keys = dictation_tools["dictation_list_keys"]
dictation_new_exercise = dictation_tools["dictation_new_exercise"]
dictation_get_exercise = dictation_tools["dictation_get_exercise"]
dictation_add_note = dictation_tools["dictation_add_note"]
dictation_add_rest = dictation_tools["dictation_add_rest"]
dictation_remove_last_note = dictation_tools["dictation_remove_last_note"]
dictation_check_answer = dictation_tools["dictation_check_answer"]
dictation_export_midi = dictation_tools["dictation_export_midi"]

logger.info("CHUK Dictation MCP Server initialized")
logger.info(f"  Default key: {settings.default_key}")
logger.info(f"  Measures: {settings.measures}")
logger.info(f"  Output dir: {OUTPUT_DIR}")
