from reviewdesk.repositories.folder_repository.folder_repository_interface import (
    FolderRepositoryInterface,
)
from reviewdesk.repositories.folder_repository.in_memory_folder_repository import (
    InMemoryFolderRepository,
)


def get_folder_repository() -> FolderRepositoryInterface:
    return InMemoryFolderRepository()
