"""
Preprocessing modules for m6A site features.
"""

from .features import FeatureAssembler, assemble_features

__all__ = ["FeatureAssembler", "assemble_features"]
