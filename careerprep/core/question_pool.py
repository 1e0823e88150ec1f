"""
Question Pool Supplier for CareerPrep

Requests difficulty-tagged MCQ pools from a hosted chat-completions
gateway and turns the model output into validated Question records.
Generation happens remotely; this module only asks, cleans and validates.
"""

import json
import logging
from typing import Any

import httpx
from pydantic import ValidationError

from careerprep.config.settings import Settings, get_settings
from careerprep.models.question import Difficulty, Question
from careerprep.prompts.mcq import MCQPrompts

logger = logging.getLogger(__name__)


class QuestionPoolError(Exception):
    """Raised when a question pool cannot be obtained or parsed."""
    pass


class GatewayRateLimitError(QuestionPoolError):
    """The AI gateway rejected the request with HTTP 429."""
    pass


class GatewayCreditsError(QuestionPoolError):
    """The AI gateway rejected the request with HTTP 402."""
    pass


# =============================================================================
# PARSING
# =============================================================================

def strip_code_fences(content: str) -> str:
    """Remove a surrounding markdown code block, if the model added one."""
    cleaned = content.strip()
    if cleaned.startswith("```json"):
        cleaned = cleaned[7:]
    elif cleaned.startswith("```"):
        cleaned = cleaned[3:]
    if cleaned.endswith("```"):
        cleaned = cleaned[:-3]
    return cleaned.strip()


def _parse_difficulty(value: Any, index: int) -> Difficulty:
    try:
        return Difficulty(str(value).strip().lower())
    except ValueError:
        logger.warning(f"Question {index} has difficulty {value!r}, defaulting to medium")
        return Difficulty.MEDIUM


def parse_question(data: Any, index: int) -> Question:
    """
    Validate one raw question entry.

    Accepts the gateway's camelCase keys as well as the model field names.

    Raises:
        QuestionPoolError: If the entry has no text or not exactly 4 options
    """
    if not isinstance(data, dict):
        raise QuestionPoolError(f"Invalid question structure at index {index}")

    text = data.get("question") or data.get("text")
    options = data.get("options")
    if not text or not isinstance(options, list) or len(options) != 4:
        raise QuestionPoolError(f"Invalid question structure at index {index}")

    correct = data.get("correctAnswer", data.get("correct_option_index"))
    if isinstance(correct, bool) or not isinstance(correct, int):
        correct = 0
    elif not 0 <= correct <= 3:
        logger.warning(f"Question {index} has answer index {correct}, defaulting to 0")
        correct = 0

    try:
        return Question(
            text=str(text),
            options=tuple(str(option) for option in options),
            correct_option_index=correct,
            explanation=data.get("explanation") or "No explanation provided.",
            difficulty=_parse_difficulty(data.get("difficulty", "medium"), index),
        )
    except ValidationError as e:
        raise QuestionPoolError(f"Invalid question at index {index}: {e}") from e


def parse_question_pool(content: str) -> list[Question]:
    """
    Parse model output into a list of questions.

    Raises:
        QuestionPoolError: If the content is not a JSON array of valid questions
    """
    cleaned = strip_code_fences(content)

    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse question pool JSON: {e}")
        raise QuestionPoolError("Failed to parse AI response as JSON") from e

    if isinstance(data, dict) and isinstance(data.get("questions"), list):
        data = data["questions"]

    if not isinstance(data, list):
        raise QuestionPoolError("Response is not an array")

    return [parse_question(entry, index) for index, entry in enumerate(data)]


# =============================================================================
# GATEWAY CLIENT
# =============================================================================

class QuestionPoolSupplier:
    """
    Client for the AI gateway that produces MCQ question pools.

    The HTTP client can be injected for testing (e.g. with httpx.MockTransport).
    """

    def __init__(
        self,
        settings: Settings | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        self.settings = settings or get_settings()
        self.prompts = MCQPrompts()

        self.client = client or httpx.AsyncClient(
            headers={
                "Authorization": f"Bearer {self.settings.ai_gateway_api_key}",
                "Content-Type": "application/json",
            },
            timeout=self.settings.ai_timeout_seconds,
        )

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()

    def _extract_content(self, result: dict) -> str:
        """Extract text content from a chat-completions response."""
        choices = result.get("choices") or [{}]
        content = choices[0].get("message", {}).get("content", "")

        # Handle case where content is a list (multi-part response)
        if isinstance(content, list):
            text_parts = []
            for part in content:
                if isinstance(part, str):
                    text_parts.append(part)
                elif isinstance(part, dict) and "text" in part:
                    text_parts.append(part["text"])
            content = "".join(text_parts)

        return content if isinstance(content, str) else str(content)

    async def _call_model(self, messages: list[dict[str, str]]) -> str:
        payload = {
            "model": self.settings.ai_model,
            "messages": messages,
            "temperature": self.settings.ai_temperature,
        }

        try:
            response = await self.client.post(self.settings.ai_gateway_url, json=payload)
        except httpx.HTTPError as e:
            logger.error(f"AI gateway request failed: {e}")
            raise QuestionPoolError("AI gateway unreachable") from e

        if response.status_code == 429:
            raise GatewayRateLimitError("Rate limit exceeded. Please try again in a moment.")
        if response.status_code == 402:
            raise GatewayCreditsError("Usage limit reached. Please add credits to continue.")
        if response.is_error:
            logger.error(f"AI gateway error: {response.status_code} {response.text}")
            raise QuestionPoolError(f"AI gateway error: {response.status_code}")

        try:
            result = response.json()
        except ValueError as e:
            raise QuestionPoolError("AI gateway returned a non-JSON body") from e

        content = self._extract_content(result)
        if not content:
            raise QuestionPoolError("No content in AI response")
        return content

    async def generate_pool(self, topic: str, number_of_questions: int) -> list[Question]:
        """
        Request a question pool on a topic.

        Args:
            topic: Subject of the test
            number_of_questions: How many questions to ask for

        Returns:
            Validated questions, each tagged with a difficulty tier
        """
        logger.info(f"Generating {number_of_questions} MCQ questions for topic: {topic}")

        content = await self._call_model(self.prompts.messages(topic, number_of_questions))
        questions = parse_question_pool(content)

        logger.info(f"Successfully generated {len(questions)} questions")
        return questions
