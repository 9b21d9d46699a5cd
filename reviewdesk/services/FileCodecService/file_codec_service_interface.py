from abc import ABC, abstractmethod

from reviewdesk.entities.message import Attachment


class FileCodecServiceInterface(ABC):
    @abstractmethod
    def encode(self, filename: str, content: str, declared_mime: str) -> Attachment:
        """
        Build a downloadable file from model-produced content.

        Dispatch is on the filename suffix only; ``declared_mime`` is advisory
        and never changes the output format or MIME type.
        """
