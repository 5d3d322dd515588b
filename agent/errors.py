from __future__ import annotations


class DispatchError(Exception):
    """Base class for errors raised while building or running a dispatch."""


class ConfigurationError(DispatchError):
    pass


class ModelCallError(DispatchError):
    """A single candidate model failed; the dispatcher moves to the next one."""

    def __init__(self, model_id: str, reason: str) -> None:
        super().__init__(f"{model_id}: {reason}")
        self.model_id = model_id
        self.reason = reason
