import json
import logging

import openai
from openai import AsyncOpenAI
from openai.types.chat import ChatCompletion
from pydantic import ValidationError

from learning_map.exceptions import ProviderError
from learning_map.llm_pipelines.generate_map.prompts import generate_map_prompt
from learning_map.llm_pipelines.response_model import LEARNING_MAP_TOOL_NAME, learning_map_tool
from learning_map.models import LearningMap

logger = logging.getLogger(__name__)

RATE_LIMIT_MESSAGE = 'Rate limit exceeded. Please try again later.'
PAYMENT_REQUIRED_MESSAGE = 'Payment required. Please add credits to your workspace.'


def parse_tool_call(response: ChatCompletion) -> LearningMap:
    """Extract the learning map from the forced `create_learning_map` call"""
    if not response.choices:
        raise ProviderError('No choices in response')

    tool_calls = response.choices[0].message.tool_calls
    if not tool_calls:
        raise ProviderError('No tool call in response')

    arguments = tool_calls[0].function.arguments
    try:
        return LearningMap.model_validate(json.loads(arguments))
    except json.JSONDecodeError as e:
        raise ProviderError(f'Could not parse tool call arguments: {e}') from e
    except ValidationError as e:
        raise ProviderError(
            f'Learning map does not match the expected shape: {e.error_count()} errors'
        ) from e


class GenerateMapPipeline:
    """
    LLM pipeline producing a learning map for a topic.

    A single chat completion with the `create_learning_map` tool forced, so the
    model answers with structured arguments instead of free text.
    """

    def __init__(self, client: AsyncOpenAI | None, model: str):
        self._client: AsyncOpenAI | None = client
        self._model: str = model

    async def generate(
        self, topic: str, level: str = 'beginner', language: str = 'en'
    ) -> LearningMap:
        """
        Generate a learning map.

        Parameters
        ----------
        topic : str
            What the user wants to learn
        level : str, default='beginner'
            One of beginner, intermediate, advanced
        language : str, default='en'
            ISO-639 code of the language the map is written in

        Returns
        -------
        LearningMap
            Validated map

        Raises
        ------
        ProviderError
            With status 429 or 402 when the gateway says so, 500 otherwise
        """
        if self._client is None:
            raise ProviderError('AI gateway API key is not configured')

        logger.info(f'Generating learning map for: {topic!r} level={level}')
        messages = generate_map_prompt(topic=topic, level=level, language=language)

        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                messages=messages,
                tools=[learning_map_tool()],
                tool_choice={'type': 'function', 'function': {'name': LEARNING_MAP_TOOL_NAME}},
            )
        except openai.RateLimitError as e:
            logger.warning(f'AI gateway rate limited: {e}')
            raise ProviderError(RATE_LIMIT_MESSAGE, status_code=429) from e
        except openai.APIStatusError as e:
            if e.status_code == 402:
                raise ProviderError(PAYMENT_REQUIRED_MESSAGE, status_code=402) from e
            logger.error(f'AI gateway error: {e.status_code} {e.message}')
            raise ProviderError(f'AI gateway error: {e.status_code}') from e
        except openai.APIError as e:
            logger.error(f'AI gateway request failed: {e}')
            raise ProviderError(f'AI gateway request failed: {e}') from e

        learning_map = parse_tool_call(response)
        logger.info(
            f'Generated learning map {learning_map.topic!r} '
            f'with {len(learning_map.main_areas)} main areas'
        )
        return learning_map
