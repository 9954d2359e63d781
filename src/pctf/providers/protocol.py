"""The one capability every provider shares with the framework."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from pctf.models.types import ConformanceCriterion


@runtime_checkable
class ConformanceProvider(Protocol):
    """A provider that publishes its conformance criterion catalog.

    The catalog must be side-effect-free to read and stable for the
    lifetime of the instance.
    """

    def get_conformance_criteria(self) -> list[ConformanceCriterion]: ...
