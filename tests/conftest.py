"""Shared fixtures for condfmt tests."""

import pytest

from condfmt.config import Config
from condfmt.evaluator import ConditionEvaluator
from condfmt.renderer import clear_cache


@pytest.fixture
def evaluator():
    """Evaluator with int/float strictness on."""
    return ConditionEvaluator(strict_number_kinds=True)


@pytest.fixture
def lenient_evaluator():
    """Evaluator that treats ints and floats as one number kind."""
    return ConditionEvaluator(strict_number_kinds=False)


@pytest.fixture
def saved_config():
    """Restore Config class attributes after the test."""
    saved = (Config.STRICT_NUMBER_KINDS, Config.CACHE_SIZE, Config.LOG_LEVEL)
    yield Config
    Config.STRICT_NUMBER_KINDS, Config.CACHE_SIZE, Config.LOG_LEVEL = saved


@pytest.fixture
def fresh_cache():
    """Empty format_string() cache before and after the test."""
    clear_cache()
    yield
    clear_cache()
