"""Facts/result pair threaded through one rule book evaluation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

F = TypeVar("F")
R = TypeVar("R")


@dataclass(frozen=True)
class Outcome(Generic[F, R]):
    facts: F
    result: R
