"""
Test helpers for the Multi Log Inspector.
"""

from .fake_backend import (
    BASE_TIME,
    FakeLogsBackend,
    event,
)

__all__ = [
    'BASE_TIME',
    'FakeLogsBackend',
    'event',
]
