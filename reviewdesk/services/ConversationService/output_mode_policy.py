from dataclasses import dataclass

from reviewdesk.entities.message import OutputMode, RequestedFileType


@dataclass(frozen=True)
class OutputPolicy:
    tool_offered: bool
    steering_text: str | None


def resolve_output_policy(
    mode: OutputMode, requested_type: RequestedFileType
) -> OutputPolicy:
    """Decide whether generate_file is offered and which note steers the model."""
    if mode == "file_only":
        return OutputPolicy(
            tool_offered=True,
            steering_text=(
                "\n[SYSTEM: The user requested ONLY a file output. "
                f"File type: {requested_type}. Generate the file using the "
                "'generate_file' tool. Keep your text response very brief "
                '(e.g., "Here is your file").]'
            ),
        )
    if mode == "text_and_file":
        return OutputPolicy(
            tool_offered=True,
            steering_text=(
                "\n[SYSTEM: The user requested BOTH text explanation and a "
                "downloadable file. Decide the best file type (doc, xlsx, or txt) "
                "based on the content (e.g. xlsx for tables, doc for formal "
                "reports). Use 'generate_file' tool to create it.]"
            ),
        )
    return OutputPolicy(tool_offered=False, steering_text=None)
