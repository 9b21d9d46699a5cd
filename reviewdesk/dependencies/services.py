from pathlib import Path

from google import genai

from reviewdesk.bootstrap.components import Components
from reviewdesk.components.configuration.settings import Settings
from reviewdesk.components.logger.logger import Logger
from reviewdesk.dependencies.repositories import get_folder_repository
from reviewdesk.services.AttachmentService.attachment_service import AttachmentService
from reviewdesk.services.AttachmentService.attachment_service_interface import (
    AttachmentServiceInterface,
)
from reviewdesk.services.ConversationService.conversation_assembler import (
    ConversationAssembler,
)
from reviewdesk.services.FileCodecService.file_codec_service import FileCodecService
from reviewdesk.services.FileCodecService.file_codec_service_interface import (
    FileCodecServiceInterface,
)
from reviewdesk.services.ReviewService.gemini_model_client import GeminiModelClient
from reviewdesk.services.ReviewService.model_client_interface import (
    ModelClientInterface,
)
from reviewdesk.services.ReviewService.review_service import (
    DEFAULT_SYSTEM_INSTRUCTION,
    ReviewService,
)
from reviewdesk.services.ReviewService.review_service_interface import (
    ReviewServiceInterface,
)
from reviewdesk.services.WorkspaceService.workspace_service import WorkspaceService
from reviewdesk.services.WorkspaceService.workspace_service_interface import (
    WorkspaceServiceInterface,
)


def load_system_instruction(prompt_path: Path) -> str:
    try:
        return prompt_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return DEFAULT_SYSTEM_INSTRUCTION


def get_attachment_service(components: Components) -> AttachmentServiceInterface:
    logger = components.get_component(Logger)
    return AttachmentService(logger=logger.get_logger("AttachmentService"))


def get_file_codec_service(components: Components) -> FileCodecServiceInterface:
    logger = components.get_component(Logger)
    return FileCodecService(logger=logger.get_logger("FileCodecService"))


def get_model_client(components: Components) -> ModelClientInterface:
    settings = components.get_component(Settings)
    logger = components.get_component(Logger)
    return GeminiModelClient(
        client=components.get_component(genai.Client),
        model_name=settings.model_name,
        logger=logger.get_logger("GeminiModelClient"),
    )


def get_review_service(components: Components) -> ReviewServiceInterface:
    settings = components.get_component(Settings)
    logger = components.get_component(Logger)
    return ReviewService(
        model_client=get_model_client(components),
        assembler=ConversationAssembler(logger.get_logger("ConversationAssembler")),
        file_codec=get_file_codec_service(components),
        logger=logger.get_logger("ReviewService"),
        system_instruction=load_system_instruction(settings.system_prompt_path),
        temperature=settings.llm_temperature,
    )


def get_workspace_service(components: Components) -> WorkspaceServiceInterface:
    logger = components.get_component(Logger)
    return WorkspaceService(
        folder_repository=get_folder_repository(),
        attachment_service=get_attachment_service(components),
        review_service=get_review_service(components),
        logger=logger.get_logger("WorkspaceService"),
    )
