"""Sampling strategies for completion requests."""

from __future__ import annotations

import dataclasses
from typing import Literal


@dataclasses.dataclass(frozen=True, slots=True)
class Sampling:
    """The sampling method used by a model in completing a request.

    Use ``Sampling.temperature(0.9)`` for temperature sampling (higher values
    take more risks, 0 is argmax) or ``Sampling.nucleus(0.1)`` to only
    consider the tokens comprising the top 10% probability mass.
    """

    kind: Literal["temperature", "nucleus"]
    amount: float

    def __post_init__(self) -> None:
        if self.kind not in ("temperature", "nucleus"):
            raise ValueError(f"unknown sampling kind: {self.kind!r}")

    @classmethod
    def temperature(cls, value: float) -> Sampling:
        return cls("temperature", value)

    @classmethod
    def nucleus(cls, value: float) -> Sampling:
        return cls("nucleus", value)

    def to_parameters(self) -> dict[str, float]:
        if self.kind == "temperature":
            return {"temperature": self.amount}
        return {"top_p": self.amount}
