"""Topology schema: services, service/namespace dependencies, alert incidents.

Revision ID: 001
Revises: None
Create Date: 2026-10-19
"""

from collections.abc import Sequence

import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import ARRAY, JSONB

from alembic import op

revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "services",
        sa.Column("service_namespace", sa.String(255), primary_key=True),
        sa.Column("service_name", sa.String(255), primary_key=True),
        sa.Column("environment", sa.String(100), nullable=True),
        sa.Column("team", sa.String(100), nullable=True),
        sa.Column("component_type", sa.String(50), nullable=True),
        sa.Column("tags", ARRAY(sa.Text), server_default="{}"),
        sa.Column("tag_sources", JSONB, server_default="{}", nullable=False),
        sa.Column("external_calls", JSONB, server_default="[]"),
        sa.Column("database_calls", JSONB, server_default="[]"),
        sa.Column("rpc_calls", JSONB, server_default="[]"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("last_seen", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_services_tags", "services", ["tags"], postgresql_using="gin")

    op.create_table(
        "service_dependencies",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("from_service_namespace", sa.String(255), nullable=False),
        sa.Column("from_service_name", sa.String(255), nullable=False),
        sa.Column("to_service_namespace", sa.String(255), nullable=False),
        sa.Column("to_service_name", sa.String(255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("last_seen", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index(
        "ix_service_deps_from",
        "service_dependencies",
        ["from_service_namespace", "from_service_name"],
    )
    op.create_index(
        "ix_service_deps_to",
        "service_dependencies",
        ["to_service_namespace", "to_service_name"],
    )

    op.create_table(
        "namespace_dependencies",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("from_namespace", sa.String(255), nullable=False, index=True),
        sa.Column("to_namespace", sa.String(255), nullable=False, index=True),
        sa.Column("created_by", sa.String(255), nullable=True),
        sa.Column("dependency_type", sa.String(50), server_default="manual"),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    op.create_table(
        "alert_incidents",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("service_namespace", sa.String(255), nullable=False),
        sa.Column("service_name", sa.String(255), nullable=False),
        sa.Column("instance_id", sa.String(255), server_default=""),
        sa.Column("severity", sa.String(20), nullable=False),
        sa.Column("message", sa.Text, nullable=False),
        sa.Column("alert_fingerprint", sa.String(64), nullable=False),
        sa.Column("incident_start", sa.DateTime(timezone=True), nullable=False),
        sa.Column("incident_end", sa.DateTime(timezone=True), nullable=True),
        sa.Column("status", sa.String(20), server_default="firing"),
        sa.Column("alert_source", sa.String(100), server_default="manual"),
        sa.Column("external_alert_id", sa.String(255), nullable=True),
        sa.Column("acknowledged_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("acknowledged_by", sa.String(255), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.CheckConstraint(
            "severity IN ('fatal', 'critical', 'warning', 'none')",
            name="alert_incidents_severity_check",
        ),
        sa.CheckConstraint(
            "status IN ('firing', 'resolved')",
            name="alert_incidents_status_check",
        ),
        sa.CheckConstraint(
            "incident_end IS NULL OR incident_end >= incident_start",
            name="check_incident_end_after_start",
        ),
    )
    op.create_index(
        "ix_alert_incidents_service_status",
        "alert_incidents",
        ["service_namespace", "service_name", "status"],
    )
    op.create_index("ix_alert_incidents_fingerprint", "alert_incidents", ["alert_fingerprint"])


def downgrade() -> None:
    op.drop_table("alert_incidents")
    op.drop_table("namespace_dependencies")
    op.drop_table("service_dependencies")
    op.drop_index("ix_services_tags", table_name="services")
    op.drop_table("services")
