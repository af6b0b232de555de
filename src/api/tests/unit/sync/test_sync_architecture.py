"""Architecture tests using pytest-archon.

These tests enforce DDD architectural boundaries between layers
within the Sync bounded context.
"""

from pytest_archon import archrule


class TestSyncDomainLayerBoundaries:
    """Tests that the domain layer has no forbidden dependencies."""

    def test_domain_does_not_import_infrastructure(self):
        """Domain layer should not depend on infrastructure.

        Validation and the error taxonomy must not know about SQLAlchemy
        sessions, HTTP clients or token libraries.
        """
        (
            archrule("sync_domain_no_infrastructure")
            .match("sync.domain*")
            .should_not_import("sync.infrastructure*", "infrastructure*")
            .check("sync")
        )

    def test_domain_does_not_import_application(self):
        (
            archrule("sync_domain_no_application")
            .match("sync.domain*")
            .should_not_import("sync.application*")
            .check("sync")
        )

    def test_domain_does_not_import_frameworks(self):
        """Domain objects should be framework-agnostic."""
        (
            archrule("sync_domain_no_frameworks")
            .match("sync.domain*")
            .should_not_import(
                "fastapi*", "starlette*", "sqlalchemy*", "httpx*", "jose*"
            )
            .check("sync")
        )


class TestSyncPortsLayerBoundaries:
    """Tests that the ports layer has no forbidden dependencies."""

    def test_ports_does_not_import_infrastructure(self):
        """Ports define interfaces, not the PostgreSQL or httpx adapters."""
        (
            archrule("sync_ports_no_infrastructure")
            .match("sync.ports*")
            .should_not_import("sync.infrastructure*")
            .check("sync")
        )

    def test_ports_does_not_import_application(self):
        (
            archrule("sync_ports_no_application")
            .match("sync.ports*")
            .should_not_import("sync.application*")
            .check("sync")
        )


class TestSyncApplicationLayerBoundaries:
    """Tests that application services depend on ports only."""

    def test_application_does_not_import_infrastructure(self):
        (
            archrule("sync_application_no_infrastructure")
            .match("sync.application*")
            .should_not_import("sync.infrastructure*", "sqlalchemy*", "httpx*")
            .check("sync")
        )

    def test_application_does_not_import_presentation(self):
        (
            archrule("sync_application_no_presentation")
            .match("sync.application*")
            .should_not_import("sync.presentation*", "fastapi*")
            .check("sync")
        )
