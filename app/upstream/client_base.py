from abc import ABC, abstractmethod

MessageContent = str | list[dict[str, object]]


class BaseCompletionClient(ABC):
    """Contract for provider-specific chat completion clients."""

    @abstractmethod
    async def create_chat_completion(
        self,
        *,
        model: str,
        content: MessageContent,
        max_tokens: int | None = None,
    ) -> str:
        """Send one user message and return the assistant reply as plain text.

        Raises:
            NetworkError: if the provider cannot be reached.
            UpstreamStatusError: if the provider answers with an error status.
            UpstreamResponseError: if the reply does not carry text.
        """
