"""Tree-Buf building blocks: varints, type ids, branch decoding, compressors and size statistics."""

__version__ = "0.1.0"