from abc import ABC, abstractmethod

from reviewdesk.entities.conversation import Folder


class FolderRepositoryInterface(ABC):
    @abstractmethod
    def list_folders(self) -> list[Folder]:
        """Return folders, most recently created first."""

    @abstractmethod
    def get_folder(self, folder_id: str) -> Folder | None:
        """Retrieve a folder by id."""

    @abstractmethod
    def add_folder(self, folder: Folder) -> None:
        """Insert a new folder at the front of the list."""

    @abstractmethod
    def save_folder(self, folder: Folder) -> bool:
        """Replace the stored folder with the same id. False if it no longer exists."""

    @abstractmethod
    def delete_folder(self, folder_id: str) -> bool:
        """Remove a folder. False if it did not exist."""
