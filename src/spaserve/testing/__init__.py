"""Test utilities for spaserve applications.

Provides an in-process ASGI test client::

    from spaserve.testing import TestClient
"""

from spaserve.testing.client import TestClient

__all__ = [
    "TestClient",
]
