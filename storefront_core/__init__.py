from .core_factory import init_core

__all__ = ["init_core"]
