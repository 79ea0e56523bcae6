"""Routes break requests to the flowed engine or the original routine."""

from __future__ import annotations

import logging
from typing import Any, Callable, FrozenSet, Optional

from .fill import BreakFunction
from .model import Document
from .reflow import ReflowEngine
from .session import get_flowed_modes

logger = logging.getLogger(__name__)


class ModeDispatcher:
    """A break function that is flowed only for the configured modes.

    The original routine and the engine are held explicitly; the set of
    flowed modes is looked up on every call so configuration changes apply
    immediately. Documents in any other mode see the original routine's
    behavior and result unchanged.
    """

    def __init__(self, original: BreakFunction, engine: Optional[ReflowEngine] = None,
                 flowed_modes: Callable[[], FrozenSet[str]] = get_flowed_modes):
        self.original = original
        self.engine = engine or ReflowEngine()
        self.flowed_modes = flowed_modes

    def dispatch(self, original: BreakFunction, document: Document, *args, **kwargs) -> Any:
        mode = document.options.major_mode
        if mode in self.flowed_modes():
            logger.debug(f"Flowed break in {mode} mode at {document.point}")
            return self.engine.insert_break(document)
        return original(document, *args, **kwargs)

    def __call__(self, document: Document, *args, **kwargs) -> Any:
        return self.dispatch(self.original, document, *args, **kwargs)
