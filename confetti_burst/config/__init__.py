from .schema import BurstConfig, resolve_shapes

__all__ = ["BurstConfig", "resolve_shapes"]
