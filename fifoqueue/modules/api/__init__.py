"""
API Module - Black Box Interface

Purpose: Shared data models for the queue
Interface: DrainPolicy, DrainState, ExtractionMode
Hidden: Field validation rules

Other modules only exchange these models, never each other's internals.
"""

from .models import DequeueWorker, DrainPolicy, DrainState, ExtractionMode

__all__ = [
    "DequeueWorker",
    "DrainPolicy",
    "DrainState",
    "ExtractionMode",
]
