from abc import ABC, abstractmethod

from google.genai import types


class ModelClientInterface(ABC):
    @abstractmethod
    async def generate(
        self,
        contents: list[types.Content],
        system_instruction: str,
        temperature: float,
        tools: list[types.Tool],
    ) -> types.GenerateContentResponse:
        """
        Run one model invocation.

        Transport, auth and retry concerns belong to the implementation; any
        failure is raised to the caller unchanged.
        """
