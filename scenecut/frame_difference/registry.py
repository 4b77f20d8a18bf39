# scenecut/frame_difference/registry.py
from typing import Dict
from .interface import DifferenceFn

_METHOD_REGISTRY: Dict[str, DifferenceFn] = {}

def register_method(name: str):
    def _wrap(fn: DifferenceFn) -> DifferenceFn:
        key = name.strip().lower()
        if key in _METHOD_REGISTRY:
            raise ValueError(f"Difference method '{key}' already registered.")
        _METHOD_REGISTRY[key] = fn
        return fn
    return _wrap

def available_methods():
    return sorted(_METHOD_REGISTRY.keys())

def get_method(name: str) -> DifferenceFn:
    key = str(getattr(name, "value", name)).strip().lower()
    if key not in _METHOD_REGISTRY:
        raise KeyError(f"Unknown difference method '{key}'. Available: {available_methods()}")
    return _METHOD_REGISTRY[key]
