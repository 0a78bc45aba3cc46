"""Test utilities for autoview applications.

Provides an in-process test client plus fragment and htmx header
assertions::

    from autoview.testing import TestClient, assert_is_fragment
"""

from autoview.testing.assertions import (
    assert_fragment_contains,
    assert_fragment_not_contains,
    assert_hx_push_url,
    assert_is_error,
    assert_is_fragment,
)
from autoview.testing.client import TestClient

__all__ = [
    "TestClient",
    "assert_fragment_contains",
    "assert_fragment_not_contains",
    "assert_hx_push_url",
    "assert_is_error",
    "assert_is_fragment",
]
