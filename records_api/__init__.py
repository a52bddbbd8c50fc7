"""
Top-level package for the Records API.

All functionality lives in submodules under ``app``.
"""

__all__ = []
