"""
generate_file tool contract.

Declares the single capability the model may call to produce a downloadable
file, and turns the model's (untrusted) call arguments into a typed value.
The tool is fire-and-collect: nothing is reported back to the model.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from google.genai import types

GENERATE_FILE_TOOL_NAME = "generate_file"

DEFAULT_FILENAME = "output.txt"
DEFAULT_MIME_TYPE = "text/plain"

GENERATE_FILE_DECLARATION = types.FunctionDeclaration(
    name=GENERATE_FILE_TOOL_NAME,
    description=(
        "Generates a downloadable file for the user. Use this when the user "
        "requests a file output or the mode requires it."
    ),
    parameters=types.Schema(
        type=types.Type.OBJECT,
        properties={
            "filename": types.Schema(
                type=types.Type.STRING,
                description=(
                    "Name of the file including extension. Supported extensions: "
                    ".doc, .xlsx, .txt. For .doc, the content must be HTML structure. "
                    "For .xlsx, content must be CSV."
                ),
            ),
            "content": types.Schema(
                type=types.Type.STRING,
                description=(
                    "The content of the file. If filename is .xlsx, this must be CSV "
                    "data. If .doc, this must be HTML body content. If .txt, plain text."
                ),
            ),
            "mimeType": types.Schema(
                type=types.Type.STRING,
                description=(
                    'The mime type of the content being passed. "text/csv" for excel, '
                    '"text/html" for word, "text/plain" for text.'
                ),
            ),
        },
        required=["filename", "content", "mimeType"],
    ),
)

GENERATE_FILE_TOOL = types.Tool(function_declarations=[GENERATE_FILE_DECLARATION])


@dataclass(frozen=True)
class GenerateFileArguments:
    filename: str
    content: str
    mime_type: str


def _as_text(value: Any, default: str) -> str:
    if value is None or value == "":
        return default
    if isinstance(value, str):
        return value
    return str(value)


def parse_generate_file_arguments(
    raw_args: Mapping[str, Any] | None,
) -> GenerateFileArguments:
    """
    Read generate_file call arguments, defaulting anything missing.

    Missing filename becomes ``output.txt``, missing content an empty string
    and missing mimeType ``text/plain``. Never raises.
    """
    args = raw_args or {}
    return GenerateFileArguments(
        filename=_as_text(args.get("filename"), DEFAULT_FILENAME),
        content=_as_text(args.get("content"), ""),
        mime_type=_as_text(args.get("mimeType"), DEFAULT_MIME_TYPE),
    )
