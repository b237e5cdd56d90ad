"""Serializers turning discovered assets and built maps into text artifacts."""

from .manifest import ManifestEmitter, ImageDeclaration
from .module import ModuleEmitter
from .output import staged_outputs, commit_outputs

__all__ = [
    "ManifestEmitter",
    "ImageDeclaration",
    "ModuleEmitter",
    "staged_outputs",
    "commit_outputs",
]
