"""Entry points mapping external requests onto the converter and optimizer."""

import dataclasses
import logging
import re
from typing import Any, List, Mapping, Optional, Type, TypeVar, Union

from .converter import ConversionOptions, SphinxConverter
from .optimizer import ContentChunk, LLMOptimizer, OptimizationOptions

logger = logging.getLogger(__name__)

OptionsT = TypeVar("OptionsT")


def _snake_case(key: str) -> str:
    """Map ``chunkSize`` style keys to ``chunk_size``."""
    return re.sub(r"(?<!^)(?=[A-Z])", "_", key).lower()


def coerce_options(options_class: Type[OptionsT], options: Union[OptionsT, Mapping[str, Any], None]) -> OptionsT:
    """
    Build an options dataclass from a dataclass, a mapping or None.

    Mapping keys may be snake_case or camelCase; unknown keys are ignored.
    """
    if options is None:
        return options_class()
    if isinstance(options, options_class):
        return options
    if not isinstance(options, Mapping):
        raise TypeError(f"Expected {options_class.__name__} or mapping, got {type(options).__name__}")

    known = {f.name for f in dataclasses.fields(options_class)}
    values = {}
    for key, value in options.items():
        name = _snake_case(key)
        if name in known:
            values[name] = value
        else:
            logger.debug(f"Ignoring unknown option '{key}' for {options_class.__name__}")
    return options_class(**values)


def convert(
    markup_text: Union[str, bytes],
    document_id: str = "document",
    options: Optional[Union[ConversionOptions, Mapping[str, Any]]] = None,
) -> str:
    """
    Convert markup text to Markdown.

    Raises:
        ParseError: When the input cannot be decoded as text
    """
    return SphinxConverter().convert_to_markdown(
        markup_text, document_id, coerce_options(ConversionOptions, options)
    )


def optimize(markdown: str, options: Optional[Union[OptimizationOptions, Mapping[str, Any]]] = None) -> str:
    """Apply the LLM cleanup transforms to Markdown."""
    return LLMOptimizer().optimize(markdown, coerce_options(OptimizationOptions, options))


def chunk(
    markdown: str, options: Optional[Union[OptimizationOptions, Mapping[str, Any]]] = None
) -> List[ContentChunk]:
    """Split Markdown into word-budgeted, context-annotated chunks."""
    return LLMOptimizer().chunk_content(markdown, coerce_options(OptimizationOptions, options))
