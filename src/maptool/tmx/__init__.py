"""Tiled (``.tmx``) map-editor export loading."""

from .models import Scene, TilesetRef, TileLayer, ObjectGroup, SceneObject, GID_MASK
from .loader import TmxLoader

__all__ = [
    "Scene",
    "TilesetRef",
    "TileLayer",
    "ObjectGroup",
    "SceneObject",
    "GID_MASK",
    "TmxLoader",
]
