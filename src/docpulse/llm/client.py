"""OpenAI client wrapper for the /ask command.

Sends a single-turn question and races the completion against a timeout.
"""

import asyncio
from typing import Optional
from openai import AsyncOpenAI
from ..errors import AIServiceError, AITimeout
from ..log import get_logger

logger = get_logger("llm")

class LLMClient:
    def __init__(
        self,
        client: Optional[AsyncOpenAI] = None,
        api_key: Optional[str] = None,
        model: str = "gpt-4o-mini",
        max_output_tokens: int = 1500,
        temperature: float = 0.7,
        timeout: float = 15.0,
    ):
        self.client = client or AsyncOpenAI(api_key=api_key)
        self.model = model
        self.max_output_tokens = max_output_tokens
        self.temperature = temperature
        self.timeout = timeout

    async def ask(self, question: str) -> str:
        """
        Returns the completion text unmodified.
        Raises AITimeout when the call outlives the timeout, AIServiceError on any other failure.
        """
        try:
            completion = await asyncio.wait_for(
                self.client.chat.completions.create(
                    model=self.model,
                    messages=[
                        {"role": "user", "content": question}
                    ],
                    max_tokens=self.max_output_tokens,
                    temperature=self.temperature,
                ),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as e:
            logger.warning(f"AI call timed out after {self.timeout}s")
            raise AITimeout() from e
        except Exception as e:
            logger.exception("OpenAI API error")
            raise AIServiceError("AI service error") from e

        return completion.choices[0].message.content or ""
