"""Rating of content filter completions.

The content filter engine answers with a single token label: ``0`` safe,
``1`` sensitive, ``2`` unsafe. An unsafe label is only trusted when its log
probability reaches ``TOXIC_THRESHOLD``; otherwise the more likely of the
safe and sensitive labels is used. Any other label is ``UNCERTAIN``.
"""

from __future__ import annotations

import logging

from openai_engines.client.parameters import TOXIC_THRESHOLD
from openai_engines.core.models import Choice
from openai_engines.core.safety import Safety

logger = logging.getLogger(__name__)

_LABELS = {"0": Safety.SAFE, "1": Safety.SENSITIVE, "2": Safety.UNSAFE}


def _top_logprobs(choice: Choice) -> dict[str, float]:
    if choice.logprobs is None or not choice.logprobs.top_logprobs:
        return {}
    return choice.logprobs.top_logprobs[0] or {}


def rate_choice(choice: Choice) -> Safety:
    """Rate the first token of a content filter completion."""
    label = choice.text.strip()
    if label not in _LABELS:
        logger.debug("Unexpected content filter label %r", label)
        return Safety.UNCERTAIN

    rating = _LABELS[label]
    if rating is not Safety.UNSAFE:
        return rating

    logprobs = _top_logprobs(choice)
    unsafe = logprobs.get("2")
    if unsafe is None or unsafe >= TOXIC_THRESHOLD:
        return rating

    safe = logprobs.get("0")
    sensitive = logprobs.get("1")
    if safe is not None and sensitive is not None:
        return Safety.SAFE if safe >= sensitive else Safety.SENSITIVE
    if safe is not None:
        return Safety.SAFE
    if sensitive is not None:
        return Safety.SENSITIVE
    return rating
