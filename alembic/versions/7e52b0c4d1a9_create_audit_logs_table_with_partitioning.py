"""create audit_logs table with partitioning

Revision ID: 7e52b0c4d1a9
Revises: 3c1f0a7d92b4
Create Date: 2026-10-12 10:48:03.270917
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa  # noqa


# revision identifiers, used by Alembic.
revision: str = "7e52b0c4d1a9"
down_revision: Union[str, Sequence[str], None] = "3c1f0a7d92b4"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

MONTHS = ("2026_10", "2026_11", "2026_12", "2027_01")


def _next_month(month: str) -> str:
    year, mon = (int(part) for part in month.split("_"))
    year, mon = (year + 1, 1) if mon == 12 else (year, mon + 1)
    return f"{year:04d}-{mon:02d}-01"


def upgrade() -> None:
    op.execute("CREATE SCHEMA IF NOT EXISTS audit")

    op.execute(
        """
        CREATE TABLE IF NOT EXISTS audit.audit_logs(
            id BIGINT GENERATED ALWAYS AS IDENTITY,
            ts_utc timestamptz NOT NULL DEFAULT now(),
            request_id text,
            scope text NOT NULL,
            action text NOT NULL,
            actor_ip inet,
            route text,
            object_type text,
            object_id bigint,
            event_id bigint,
            show_id bigint,
            performance_id bigint,
            booking_id bigint,
            status text NOT NULL,
            reason text,
            meta jsonb NOT NULL DEFAULT '{}'::jsonb,
            CONSTRAINT chk_audit_status CHECK (status IN ('SUCCESS','FAIL')),
            PRIMARY KEY (ts_utc, id)
        ) PARTITION BY RANGE (ts_utc)
        """
    )

    op.execute("CREATE INDEX IF NOT EXISTS ix_audit_logs_ts ON audit.audit_logs (ts_utc DESC)")
    op.execute("CREATE INDEX IF NOT EXISTS ix_audit_logs_action_ts ON audit.audit_logs (action, ts_utc DESC)")
    op.execute("CREATE INDEX IF NOT EXISTS ix_audit_logs_obj ON audit.audit_logs (object_type, object_id)")
    op.execute("CREATE INDEX IF NOT EXISTS ix_audit_logs_event ON audit.audit_logs (event_id)")
    op.execute("CREATE INDEX IF NOT EXISTS ix_audit_logs_show ON audit.audit_logs (show_id)")
    op.execute("CREATE INDEX IF NOT EXISTS ix_audit_logs_performance ON audit.audit_logs (performance_id)")
    op.execute("CREATE INDEX IF NOT EXISTS ix_audit_logs_booking ON audit.audit_logs (booking_id)")
    op.execute("CREATE INDEX IF NOT EXISTS ix_audit_logs_meta_gin ON audit.audit_logs USING gin (meta jsonb_path_ops)")

    for month in MONTHS:
        start = month.replace("_", "-") + "-01"
        op.execute(
            f"""
            CREATE TABLE IF NOT EXISTS audit.audit_logs_{month}
              PARTITION OF audit.audit_logs
              FOR VALUES FROM (TIMESTAMPTZ '{start} 00:00:00+00') TO (TIMESTAMPTZ '{_next_month(month)} 00:00:00+00')
            """
        )
    op.execute(
        """
        CREATE TABLE IF NOT EXISTS audit.audit_logs_default
          PARTITION OF audit.audit_logs DEFAULT
        """
    )


def downgrade() -> None:
    op.execute("DROP SCHEMA IF EXISTS audit CASCADE")
