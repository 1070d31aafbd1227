"""Test utilities for paydesk applications.

    from paydesk.testing import TestClient
"""

from paydesk.testing.client import TestClient

__all__ = ["TestClient"]
