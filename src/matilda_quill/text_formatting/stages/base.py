#!/usr/bin/env python3
"""Stage contract shared by every pipeline stage."""

from abc import ABC, abstractmethod

from ...schemas.configuration import Configuration, StageId


class Stage(ABC):
    """One named, independently configurable text transformation.

    Stages are pure: ``process`` reads ``config`` and returns new text without
    keeping state between calls.
    """

    stage_id: StageId
    name: str = "stage"

    @abstractmethod
    def process(self, text: str, config: Configuration) -> str:
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}(stage_id={self.stage_id.value!r})"
