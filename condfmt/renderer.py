"""
Renderer for compiled templates.

Conditions are evaluated in source order and concatenated with the plain
tail, then every {i} placeholder in the result is replaced with str(args[i])
in a single pass (substituted values are not scanned again).
"""

import functools
from typing import Any, Sequence

from condfmt.config import Config
from condfmt.core.condition import PLACEHOLDER_PATTERN, CompiledTemplate
from condfmt.evaluator import ConditionEvaluator, resolve_pointer
from condfmt.parser import compile_template
from condfmt.utils.logger import get_logger

logger = get_logger(__name__)


def substitute_placeholders(text: str, args: Sequence[Any]) -> str:
    """Replace every {i} in text with str(args[i])."""

    def replace(match):
        return str(resolve_pointer(int(match.group(1)), args))

    return PLACEHOLDER_PATTERN.sub(replace, text)


class TemplateRenderer:
    """Renders CompiledTemplate objects against argument lists."""

    def __init__(self, evaluator: ConditionEvaluator | None = None):
        self.evaluator = evaluator or ConditionEvaluator()

    def render(self, template: CompiledTemplate, args: Sequence[Any]) -> str:
        """
        Render a compiled template.

        Args:
            template: Result of compile_template()
            args: Positional arguments referenced by {i} pointers

        Returns:
            Rendered string

        Raises:
            EvaluationError: If an argument is missing, None, or of the wrong kind
        """
        if args is None:
            raise TypeError("args cannot be None")

        parts = [self.evaluator.apply(condition, args) for condition in template.conditions]
        parts.append(template.tail)

        return substitute_placeholders(''.join(parts), args)


def render(template: CompiledTemplate, *args, strict_number_kinds: bool | None = None) -> str:
    """Render a compiled template with positional args."""
    renderer = TemplateRenderer(ConditionEvaluator(strict_number_kinds))
    return renderer.render(template, args)


@functools.lru_cache(maxsize=Config.CACHE_SIZE)
def _compile_cached(source: str) -> CompiledTemplate:
    return compile_template(source)


def format_string(source: str, *args) -> str:
    """Compile (cached) and render in one call."""
    return render(_compile_cached(source), *args)


def clear_cache() -> None:
    """Drop all cached compiled templates."""
    _compile_cached.cache_clear()
    logger.debug("Cleared compiled template cache")
