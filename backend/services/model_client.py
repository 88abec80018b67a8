"""
Generative model clients used by the report analyzer.
"""

from abc import ABC, abstractmethod

from agno.agent import Agent
from agno.models.google import Gemini


class GenerativeModelClient(ABC):
    """
    Contract for an outbound generative model call.

    Implementations own their model handle; the analyzer only sends a prompt
    and reads back the raw text reply.
    """

    provider_name: str = "unknown"
    model_id: str = "unknown"

    @abstractmethod
    async def generate(self, prompt: str) -> str:
        """
        Send a prompt to the model.

        Args:
            prompt: Full prompt text

        Returns:
            Raw text of the model reply
        """
        raise NotImplementedError


class GeminiModelClient(GenerativeModelClient):
    """
    Google Gemini through an agno Agent.
    """

    provider_name = "Google Gemini"

    def __init__(self, api_key: str, model_id: str = "gemini-2.5-flash"):
        """
        Initialize the Gemini client.

        Args:
            api_key: Google AI Studio API key
            model_id: Gemini model identifier
        """
        self.model_id = model_id
        self.agent = Agent(
            name="ReportAnalyzer",
            model=Gemini(id=model_id, api_key=api_key),
            markdown=False,
        )

    async def generate(self, prompt: str) -> str:
        response = await self.agent.arun(prompt)

        # Extract text content
        if hasattr(response, "content"):
            content = response.content
            return content if isinstance(content, str) else str(content)
        return str(response)
