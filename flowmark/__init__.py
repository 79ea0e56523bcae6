"""Flowmark - hard and soft line breaks with format=flowed reflow."""

from .annotate import NewlineAnnotator, RenderValue
from .dispatch import ModeDispatcher
from .model import CharProps, Document, DocumentOptions, Marker
from .modes import FlowedFillMode, HardNewlinesMode
from .reflow import ReflowEngine
from .tracker import ChangeTracker

__all__ = [
    'CharProps',
    'ChangeTracker',
    'Document',
    'DocumentOptions',
    'FlowedFillMode',
    'HardNewlinesMode',
    'Marker',
    'ModeDispatcher',
    'NewlineAnnotator',
    'ReflowEngine',
    'RenderValue',
]
