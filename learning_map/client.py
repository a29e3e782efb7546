import logging
from typing import get_args

import httpx
from pydantic import ValidationError

from learning_map.exceptions import GenerationError, LevelValidationError, TopicValidationError
from learning_map.models import LearningMap, Level

logger = logging.getLogger(__name__)

LEVELS: tuple[str, ...] = get_args(Level)

GENERIC_FAILURE_MESSAGE = 'Failed to generate learning map'
MALFORMED_RESPONSE_MESSAGE = 'Received a malformed learning map. Please try again.'
STATUS_MESSAGES = {
    429: 'Rate limit exceeded. Please try again later.',
    402: 'Payment required. Please add credits to your workspace.',
}


def validate_topic(topic: str) -> str:
    """Return the stripped topic, or raise if nothing is left"""
    topic = (topic or '').strip()
    if not topic:
        raise TopicValidationError()
    return topic


class MapGenerationClient:
    """Calls the generation endpoint and hands back a validated `LearningMap`"""

    def __init__(
        self,
        url: str,
        *,
        timeout: float = 120.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._url = url
        self._timeout = timeout
        self._transport = transport

    async def generate(self, topic: str, level: str = 'beginner') -> LearningMap:
        topic = validate_topic(topic)
        if level not in LEVELS:
            raise LevelValidationError(level, LEVELS)

        try:
            async with httpx.AsyncClient(
                transport=self._transport, timeout=self._timeout
            ) as client:
                response = await client.post(self._url, json={'topic': topic, 'level': level})
        except httpx.HTTPError as e:
            logger.error(f'Generation request failed: {e!r}')
            raise GenerationError(GENERIC_FAILURE_MESSAGE) from e

        if response.is_error:
            raise GenerationError(_error_message(response), status_code=response.status_code)

        try:
            return LearningMap.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            logger.error(f'Malformed learning map received: {e}')
            raise GenerationError(MALFORMED_RESPONSE_MESSAGE) from e


def _error_message(response: httpx.Response) -> str:
    if response.status_code in STATUS_MESSAGES:
        return STATUS_MESSAGES[response.status_code]

    logger.error(f'Generation endpoint answered {response.status_code}: {response.text[:500]}')
    try:
        body = response.json()
    except ValueError:
        body = None
    error = body.get('error') if isinstance(body, dict) else None
    return error if isinstance(error, str) and error else GENERIC_FAILURE_MESSAGE
