from .config import InspectorConfig

__all__ = [
    "InspectorConfig",
]
