import argparse
import asyncio
import base64
from collections.abc import Sequence
from pathlib import Path

from reviewdesk.bootstrap.bootstrapper import bootstrap_workspace
from reviewdesk.components.configuration.settings import get_settings
from reviewdesk.entities.message import Attachment, Message
from reviewdesk.services.WorkspaceService.workspace_service_interface import (
    WorkspaceServiceInterface,
)


def save_generated_files(files: Sequence[Attachment], output_dir: Path) -> list[Path]:
    """Decode generated attachments and write them under output_dir."""
    output_dir.mkdir(parents=True, exist_ok=True)
    saved: list[Path] = []
    for attachment in files:
        # Model-chosen names must not escape output_dir.
        target = output_dir / (Path(attachment["name"]).name or "output.txt")
        target.write_bytes(base64.b64decode(attachment["data"]))
        saved.append(target)
    return saved


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Review documents with Gemini and download generated files."
    )
    parser.add_argument("instruction", nargs="?", default="", help="Review instruction")
    parser.add_argument("-f", "--file", action="append", default=[], dest="files")
    parser.add_argument(
        "--mode",
        choices=["text_only", "file_only", "text_and_file"],
        default="text_only",
    )
    parser.add_argument(
        "--type",
        choices=["doc", "xlsx", "txt", "auto"],
        default="txt",
        dest="file_type",
    )
    parser.add_argument("--project", default="Review", help="Project (folder) name")
    parser.add_argument("--output-dir", type=Path, default=None)
    parser.add_argument(
        "--interactive",
        action="store_true",
        help="Keep asking for follow-up instructions until an empty line",
    )
    return parser


def print_reply(reply: Message, output_dir: Path) -> None:
    print(reply["text"])
    for path in save_generated_files(reply.get("generated_files", []), output_dir):
        print(f"Saved {path}")


async def run(args: argparse.Namespace) -> None:
    workspace: WorkspaceServiceInterface = bootstrap_workspace()
    output_dir: Path = args.output_dir or get_settings().output_dir

    workspace.create_folder(args.project)
    if args.files:
        workspace.add_draft_files(args.files)
    instruction: str = args.instruction

    while True:
        workspace.save_draft(instruction)
        reply = await workspace.submit(args.mode, args.file_type)
        if reply is not None:
            print_reply(reply, output_dir)

        if not args.interactive:
            return
        try:
            instruction = input("> ").strip()
        except EOFError:
            return
        if not instruction:
            return


if __name__ == "__main__":
    asyncio.run(run(build_parser().parse_args()))
