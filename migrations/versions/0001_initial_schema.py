"""initial schema (manual)

Revision ID: 0001
Revises:
Create Date: 2024-01-01 00:00:00.000000
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0001"
down_revision = None
branch_labels = None
depends_on = None

QUESTION_TYPES = ("YES_NO", "SCALE_0_10", "MULTIPLE_CHOICE")
INTENSITY_LEVELS = ("LIGHT", "MODERATE", "STRONG")


def upgrade() -> None:
    # quizzes
    op.create_table(
        "quizzes",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_by", sa.Integer(), nullable=True),
        sa.Column("config_version", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
    )
    # at most one active quiz
    op.create_index(
        "uq_quizzes_single_active", "quizzes", ["is_active"], unique=True,
        sqlite_where=sa.text("is_active = 1"),
        postgresql_where=sa.text("is_active"),
    )

    # questions
    op.create_table(
        "quiz_questions",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("quiz_id", sa.Integer(), sa.ForeignKey("quizzes.id"), nullable=False),
        sa.Column("text", sa.String(), nullable=False),
        sa.Column("question_type", sa.Enum(*QUESTION_TYPES, name="questiontype"), nullable=False),
        sa.Column("weight", sa.Numeric(5, 2), nullable=False, server_default="1.00"),
        sa.Column("order", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_quiz_questions_quiz_id", "quiz_questions", ["quiz_id"])

    # options (multiple choice only)
    op.create_table(
        "quiz_question_options",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("question_id", sa.Integer(), sa.ForeignKey("quiz_questions.id"), nullable=False),
        sa.Column("text", sa.String(), nullable=False),
        sa.Column("score_value", sa.String(length=32), nullable=False),
        sa.Column("order", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_quiz_question_options_question_id", "quiz_question_options", ["question_id"])

    # scoring table
    op.create_table(
        "quiz_scoring_rules",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("quiz_id", sa.Integer(), sa.ForeignKey("quizzes.id"), nullable=False),
        sa.Column("min_score", sa.Numeric(8, 2), nullable=False),
        sa.Column("max_score", sa.Numeric(8, 2), nullable=False),
        sa.Column("is_good_day", sa.Boolean(), nullable=False),
        sa.Column("recommended_exercise_type", sa.String(length=100), nullable=False),
        sa.Column("exercise_description", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint("min_score <= max_score", name="ck_quiz_scoring_rules_range"),
    )
    op.create_index("ix_quiz_scoring_rules_quiz_id", "quiz_scoring_rules", ["quiz_id"])

    # responses: one per patient per quiz per calendar day
    op.create_table(
        "quiz_responses",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("quiz_id", sa.Integer(), sa.ForeignKey("quizzes.id"), nullable=False),
        sa.Column("response_date", sa.Date(), nullable=False),
        sa.Column("total_score", sa.Numeric(12, 4), nullable=False),
        sa.Column("is_good_day_for_exercise", sa.Boolean(), nullable=False),
        sa.Column("recommended_exercise_type", sa.String(length=100), nullable=False),
        sa.Column("exercise_description", sa.String(), nullable=True),
        sa.Column("general_observations", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint("user_id", "quiz_id", "response_date", name="uq_quiz_responses_user_quiz_day"),
    )
    op.create_index("ix_quiz_responses_user_id", "quiz_responses", ["user_id"])
    op.create_index("ix_quiz_responses_quiz_id", "quiz_responses", ["quiz_id"])
    op.create_index("ix_quiz_responses_response_date", "quiz_responses", ["response_date"])

    op.create_table(
        "quiz_response_answers",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("response_id", sa.Integer(), sa.ForeignKey("quiz_responses.id", ondelete="CASCADE"), nullable=False),
        sa.Column("question_id", sa.Integer(), nullable=False),
        sa.Column("answer_value", sa.String(length=255), nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_quiz_response_answers_response_id", "quiz_response_answers", ["response_id"])

    # exercise catalog
    op.create_table(
        "exercise_tutorials",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("intensity_level", sa.Enum(*INTENSITY_LEVELS, name="intensitylevel"), nullable=False),
        sa.Column("safety_guidelines", sa.String(), nullable=True),
        sa.Column("video_link", sa.String(length=500), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_exercise_tutorials_intensity_level", "exercise_tutorials", ["intensity_level"])


def downgrade() -> None:
    op.drop_table("exercise_tutorials")
    op.drop_table("quiz_response_answers")
    op.drop_table("quiz_responses")
    op.drop_table("quiz_scoring_rules")
    op.drop_table("quiz_question_options")
    op.drop_table("quiz_questions")
    op.drop_index("uq_quizzes_single_active", table_name="quizzes")
    op.drop_table("quizzes")
    sa.Enum(name="intensitylevel").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="questiontype").drop(op.get_bind(), checkfirst=True)
