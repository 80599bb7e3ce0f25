"""
Tests module - Unit and integration tests for the posenet package

Provides:
- Core module tests (config, constants, exceptions)
- Decoding tests (geometry, single pose, multi pose, decoder facade)
- Preprocessing tests
- IO and CLI tests
"""

__all__ = []
