"""
Tools module for model-callable capabilities.

This module contains the function declarations offered to the Gemini model.
"""

from reviewdesk.tools.generate_file_tool import (
    GENERATE_FILE_DECLARATION,
    GENERATE_FILE_TOOL,
    GENERATE_FILE_TOOL_NAME,
    GenerateFileArguments,
    parse_generate_file_arguments,
)

__all__ = [
    "GENERATE_FILE_DECLARATION",
    "GENERATE_FILE_TOOL",
    "GENERATE_FILE_TOOL_NAME",
    "GenerateFileArguments",
    "parse_generate_file_arguments",
]
