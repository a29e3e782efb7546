import pytest

from learning_map.models import LearningMap
from tests.helpers import make_map_payload


@pytest.fixture
def map_payload() -> dict:
    return make_map_payload()


@pytest.fixture
def learning_map(map_payload) -> LearningMap:
    return LearningMap.model_validate(map_payload)
