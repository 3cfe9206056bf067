"""Fake stores for integration testing."""

from tests.integration.fakes.topology_fake import FakeTopologyStore

__all__ = ["FakeTopologyStore"]
