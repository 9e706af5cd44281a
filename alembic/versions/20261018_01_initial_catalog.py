"""
Initial catalog schema.

- users, categories, programs, actors, program_actor
- seasons, episodes, comments
- watchlist (composite PK user_id + program_id)

All child foreign keys cascade on delete, so removing a program removes its
seasons, episodes, comments, actor links and watchlist rows.
"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# Revision identifiers, used by Alembic.
revision = "20261018_01_initial_catalog"
down_revision = None
branch_labels = None
depends_on = None

UUID = postgresql.UUID(as_uuid=True)


def _timestamps() -> list:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    # --- Accounts ---
    op.create_table(
        "users",
        sa.Column("id", UUID, nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("username", sa.String(length=50), nullable=True),
        sa.Column("hashed_password", sa.String(length=255), nullable=False),
        sa.Column("is_active", sa.Boolean(), server_default=sa.text("true"), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_users"),
        sa.UniqueConstraint("username", name="uq_users_username"),
    )
    op.create_index("uq_users_email_lower", "users", [sa.text("lower(email)")], unique=True)

    # --- Catalog ---
    op.create_table(
        "categories",
        sa.Column("id", UUID, nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_categories"),
        sa.UniqueConstraint("name", name="uq_categories_name"),
    )

    op.create_table(
        "programs",
        sa.Column("id", UUID, nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("slug", sa.String(length=255), nullable=False),
        sa.Column("summary", sa.Text(), nullable=False),
        sa.Column("poster", sa.String(length=2048), nullable=True),
        sa.Column("category_id", UUID, nullable=True),
        sa.Column("owner_id", UUID, nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ["category_id"], ["categories.id"], ondelete="SET NULL", name="fk_programs_category_id_categories"
        ),
        sa.ForeignKeyConstraint(["owner_id"], ["users.id"], ondelete="SET NULL", name="fk_programs_owner_id_users"),
        sa.PrimaryKeyConstraint("id", name="pk_programs"),
    )
    op.create_index("ix_programs_slug", "programs", ["slug"])
    op.create_index("ix_programs_category_id", "programs", ["category_id"])
    op.create_index("ix_programs_owner_id", "programs", ["owner_id"])
    op.create_index("ix_programs_slug_created", "programs", ["slug", "created_at"])

    op.create_table(
        "actors",
        sa.Column("id", UUID, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_actors"),
    )
    op.create_index("ix_actors_name", "actors", ["name"])

    op.create_table(
        "program_actor",
        sa.Column("program_id", UUID, nullable=False),
        sa.Column("actor_id", UUID, nullable=False),
        sa.ForeignKeyConstraint(
            ["program_id"], ["programs.id"], ondelete="CASCADE", name="fk_program_actor_program_id_programs"
        ),
        sa.ForeignKeyConstraint(["actor_id"], ["actors.id"], ondelete="CASCADE", name="fk_program_actor_actor_id_actors"),
        sa.PrimaryKeyConstraint("program_id", "actor_id", name="pk_program_actor"),
    )
    op.create_index("ix_program_actor_actor_id", "program_actor", ["actor_id"])

    op.create_table(
        "seasons",
        sa.Column("id", UUID, nullable=False),
        sa.Column("program_id", UUID, nullable=False),
        sa.Column("number", sa.Integer(), nullable=False),
        sa.Column("year", sa.Integer(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint("number >= 1", name="ck_seasons_season_number_positive"),
        sa.ForeignKeyConstraint(["program_id"], ["programs.id"], ondelete="CASCADE", name="fk_seasons_program_id_programs"),
        sa.PrimaryKeyConstraint("id", name="pk_seasons"),
    )
    op.create_index("ix_seasons_program_id", "seasons", ["program_id"])
    op.create_index("ix_seasons_program_number", "seasons", ["program_id", "number"])

    op.create_table(
        "episodes",
        sa.Column("id", UUID, nullable=False),
        sa.Column("season_id", UUID, nullable=False),
        sa.Column("number", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("synopsis", sa.Text(), nullable=True),
        sa.Column("slug", sa.String(length=255), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("number >= 1", name="ck_episodes_episode_number_positive"),
        sa.ForeignKeyConstraint(["season_id"], ["seasons.id"], ondelete="CASCADE", name="fk_episodes_season_id_seasons"),
        sa.PrimaryKeyConstraint("id", name="pk_episodes"),
    )
    op.create_index("ix_episodes_season_id", "episodes", ["season_id"])
    op.create_index("ix_episodes_slug", "episodes", ["slug"])
    op.create_index("ix_episodes_season_slug", "episodes", ["season_id", "slug"])

    # --- Engagement ---
    op.create_table(
        "comments",
        sa.Column("id", UUID, nullable=False),
        sa.Column("episode_id", UUID, nullable=False),
        sa.Column("author_id", UUID, nullable=False),
        sa.Column("comment", sa.Text(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["episode_id"], ["episodes.id"], ondelete="CASCADE", name="fk_comments_episode_id_episodes"),
        sa.ForeignKeyConstraint(["author_id"], ["users.id"], ondelete="CASCADE", name="fk_comments_author_id_users"),
        sa.PrimaryKeyConstraint("id", name="pk_comments"),
    )
    op.create_index("ix_comments_episode_id", "comments", ["episode_id"])
    op.create_index("ix_comments_author_id", "comments", ["author_id"])
    op.create_index("ix_comments_episode_created", "comments", ["episode_id", "created_at"])

    op.create_table(
        "watchlist",
        sa.Column("user_id", UUID, nullable=False),
        sa.Column("program_id", UUID, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE", name="fk_watchlist_user_id_users"),
        sa.ForeignKeyConstraint(["program_id"], ["programs.id"], ondelete="CASCADE", name="fk_watchlist_program_id_programs"),
        sa.PrimaryKeyConstraint("user_id", "program_id", name="pk_watchlist"),
    )
    op.create_index("ix_watchlist_program_id", "watchlist", ["program_id"])


def downgrade() -> None:
    op.drop_table("watchlist")
    op.drop_table("comments")
    op.drop_table("episodes")
    op.drop_table("seasons")
    op.drop_table("program_actor")
    op.drop_table("actors")
    op.drop_table("programs")
    op.drop_table("categories")
    op.drop_index("uq_users_email_lower", table_name="users")
    op.drop_table("users")
