from abc import ABC, abstractmethod


class BaseExtractionClient(ABC):
    """Contract for provider-specific AI collaborator clients."""

    @abstractmethod
    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        max_tokens: int,
        system_prompt: str,
        user_prompt: str,
    ) -> str:
        """Return the provider reply as plain text, empty when it has none.

        Raises:
            ExtractionError: if the provider call itself fails.
        """
