"""Keeps hard-newline markers current as a document is edited."""

from __future__ import annotations

import logging
from typing import Optional

from .annotate import NewlineAnnotator
from .model import Document

logger = logging.getLogger(__name__)


class ChangeTracker:
    """Re-annotates exactly the region touched by each edit."""

    def __init__(self, document: Document, annotator: Optional[NewlineAnnotator] = None):
        self.document = document
        self.annotator = annotator or NewlineAnnotator()
        self.attached = False

    def attach(self) -> None:
        self.document.add_change_listener(self.on_edit)
        self.attached = True

    def detach(self) -> None:
        self.document.remove_change_listener(self.on_edit)
        self.attached = False

    def on_edit(self, beg: int, end: int) -> None:
        try:
            with self.document.save_excursion():
                self.annotator.annotate(self.document, beg, end)
        except Exception:
            # Justification: annotation is cosmetic; a failure here must
            # never abort the edit that triggered it.
            logger.exception(f"Could not annotate line breaks in [{beg}, {end})")
