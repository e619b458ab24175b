"""
Loaders for prediction inputs.

This module provides loaders that can handle:
- Delimited sample feature tables
- Pre-trained classifier artifacts (joblib)
"""

from .base import DataLoader
from .model import ModelLoader
from .samples import SampleTableLoader

__all__ = ["DataLoader", "ModelLoader", "SampleTableLoader"]
