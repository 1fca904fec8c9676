"""Create timetable tables.

configs hold the scheduling parameters, versions are independently
activatable and publishable snapshots, and slots place one teacher, class
and subject in a day/period cell of a version.

No teacher and no class may be booked twice in the same version, day and
period; both rules are unique constraints so conflicting writes fail in
the database.

Revision ID: 1769000000000
Revises: 1768000000000
"""

import sqlalchemy as sa
from alembic import op

from app.migrations.helpers import created_at, has_table, updated_at, uuid_pk

revision: int = 1769000000000
down_revision: int | None = 1768000000000
name = "CreateTimetableTables"


def upgrade() -> None:
    if not has_table("timetable_configs"):
        op.create_table(
            "timetable_configs",
            uuid_pk(),
            sa.Column("periodsPerDay", sa.Integer, nullable=False, server_default="8"),
            sa.Column("schoolStartTime", sa.String(5), nullable=False, server_default="08:00"),
            sa.Column("schoolEndTime", sa.String(5), nullable=False, server_default="16:00"),
            sa.Column("periodDurationMinutes", sa.Integer, nullable=False, server_default="40"),
            sa.Column("breakPeriods", sa.JSON, nullable=True),
            sa.Column("lessonsPerWeek", sa.JSON, nullable=True),
            sa.Column("daysOfWeek", sa.JSON, nullable=True),
            sa.Column("additionalPreferences", sa.JSON, nullable=True),
            sa.Column("isActive", sa.Boolean, nullable=False, server_default=sa.true()),
            created_at(),
            updated_at(),
        )

    if not has_table("timetable_versions"):
        op.create_table(
            "timetable_versions",
            uuid_pk(),
            sa.Column("name", sa.String(255), nullable=False),
            sa.Column("description", sa.Text, nullable=True),
            sa.Column("configId", sa.Uuid, nullable=True),
            sa.Column("isActive", sa.Boolean, nullable=False, server_default=sa.false()),
            sa.Column("isPublished", sa.Boolean, nullable=False, server_default=sa.false()),
            sa.Column("createdBy", sa.Uuid, nullable=True),
            created_at(),
            updated_at(),
        )

    if not has_table("timetable_slots"):
        op.create_table(
            "timetable_slots",
            uuid_pk(),
            sa.Column("versionId", sa.Uuid, nullable=False),
            sa.Column("teacherId", sa.Uuid, nullable=False),
            sa.Column("classId", sa.Uuid, nullable=False),
            sa.Column("subjectId", sa.Uuid, nullable=False),
            sa.Column("dayOfWeek", sa.String(20), nullable=False),
            sa.Column("periodNumber", sa.Integer, nullable=False),
            sa.Column("startTime", sa.String(5), nullable=True),
            sa.Column("endTime", sa.String(5), nullable=True),
            sa.Column("room", sa.String(100), nullable=True),
            sa.Column("isBreak", sa.Boolean, nullable=False, server_default=sa.false()),
            sa.Column("isManuallyEdited", sa.Boolean, nullable=False, server_default=sa.false()),
            sa.Column("editedAt", sa.DateTime, nullable=True),
            sa.Column("editedBy", sa.Uuid, nullable=True),
            sa.UniqueConstraint(
                "versionId",
                "teacherId",
                "dayOfWeek",
                "periodNumber",
                name="UQ_timetable_slots_teacher_day_period",
            ),
            sa.UniqueConstraint(
                "versionId",
                "classId",
                "dayOfWeek",
                "periodNumber",
                name="UQ_timetable_slots_class_day_period",
            ),
            sa.ForeignKeyConstraint(
                ["versionId"],
                ["timetable_versions.id"],
                name="FK_timetable_slots_version",
                ondelete="CASCADE",
            ),
            sa.ForeignKeyConstraint(
                ["teacherId"], ["teachers.id"], name="FK_timetable_slots_teacher", ondelete="CASCADE"
            ),
            sa.ForeignKeyConstraint(
                ["classId"], ["classes.id"], name="FK_timetable_slots_class", ondelete="CASCADE"
            ),
            sa.ForeignKeyConstraint(
                ["subjectId"], ["subjects.id"], name="FK_timetable_slots_subject", ondelete="CASCADE"
            ),
        )
        op.create_index(
            "IDX_timetable_slots_version_day_period",
            "timetable_slots",
            ["versionId", "dayOfWeek", "periodNumber"],
        )


def downgrade() -> None:
    op.drop_table("timetable_slots")
    op.drop_table("timetable_versions")
    op.drop_table("timetable_configs")
