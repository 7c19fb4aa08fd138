"""Rendering of assistant replies and usage accounting."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable


@dataclass(frozen=True)
class Pricing:
    """USD per 1K tokens."""

    prompt_rate: float = 0.01
    completion_rate: float = 0.03


def estimate_cost(usage: Any, pricing: Pricing = Pricing()) -> float:
    """Return the price of a run from its token usage."""
    return (
        usage.prompt_tokens / 1000 * pricing.prompt_rate
        + usage.completion_tokens / 1000 * pricing.completion_rate
    )


def render_block(block: Any) -> str:
    if block.type == "text":
        return block.text.value.replace("\n", "<br>")
    return f"Unsupported content type: {block.type}"


def render_content(blocks: Iterable[Any]) -> str:
    """Join message content blocks into a single HTML string.

    Text blocks get their line breaks turned into ``<br>`` tags, anything
    else becomes a placeholder naming its type. Order is preserved and no
    separator is added between blocks.
    """
    return "".join(render_block(block) for block in blocks)
