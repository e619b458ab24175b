"""
Sequence encoding for m6A site features.
"""

from .dna import DNAEncoder, dna_encoding

__all__ = ["DNAEncoder", "dna_encoding"]
