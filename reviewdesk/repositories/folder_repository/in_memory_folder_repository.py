from reviewdesk.entities.conversation import Folder
from reviewdesk.repositories.folder_repository.folder_repository_interface import (
    FolderRepositoryInterface,
)


class InMemoryFolderRepository(FolderRepositoryInterface):
    def __init__(self) -> None:
        self.folders: list[Folder] = []

    def list_folders(self) -> list[Folder]:
        return list(self.folders)

    def get_folder(self, folder_id: str) -> Folder | None:
        for folder in self.folders:
            if folder.id == folder_id:
                return folder
        return None

    def add_folder(self, folder: Folder) -> None:
        self.folders.insert(0, folder)

    def save_folder(self, folder: Folder) -> bool:
        for index, stored in enumerate(self.folders):
            if stored.id == folder.id:
                self.folders[index] = folder
                return True
        return False

    def delete_folder(self, folder_id: str) -> bool:
        remaining = [folder for folder in self.folders if folder.id != folder_id]
        deleted = len(remaining) != len(self.folders)
        self.folders = remaining
        return deleted
