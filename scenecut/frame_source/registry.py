# scenecut/frame_source/registry.py
from typing import Dict, Type, Any
from .interface import FrameSource

_SOURCE_REGISTRY: Dict[str, Type[FrameSource]] = {}

def register_source(name: str):
    """Decorator registering a frame source backend under `name`."""
    def _wrap(cls: Type[FrameSource]) -> Type[FrameSource]:
        key = name.strip().lower()
        if key in _SOURCE_REGISTRY:
            raise ValueError(f"Frame source '{key}' already registered.")
        cls.name = key
        _SOURCE_REGISTRY[key] = cls
        return cls
    return _wrap

def available_sources():
    return sorted(_SOURCE_REGISTRY.keys())

def create_source(name: str, **kwargs: Any) -> FrameSource:
    key = name.strip().lower()
    if key not in _SOURCE_REGISTRY:
        raise KeyError(f"Unknown frame source '{key}'. Available: {available_sources()}")
    return _SOURCE_REGISTRY[key](**kwargs)
