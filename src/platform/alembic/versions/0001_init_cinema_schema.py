"""init_cinema_schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19

Schema:
- genre / movie / movie_genre: catalog
- hall / seat: halls and their fixed seat grid (unique hall_id, row, number)
- showtime: movie in a hall at a start time, (hall_id, time) index for the
  exclusivity window scan
- booking / booking_seat: reservations and their seat links
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create all tables with final schema."""

    # ========== Catalog ==========

    op.create_table(
        'genre',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_genre'),
        sa.UniqueConstraint('name', name='uq_genre_name'),
    )

    op.create_table(
        'movie',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('runtime', sa.Integer(), nullable=True),
        sa.Column('release_date', sa.Date(), nullable=True),
        sa.Column('poster_url', sa.String(length=512), nullable=True),
        sa.PrimaryKeyConstraint('id', name='pk_movie'),
    )
    op.create_index('ix_movie_title', 'movie', ['title'])

    op.create_table(
        'movie_genre',
        sa.Column('movie_id', sa.Integer(), nullable=False),
        sa.Column('genre_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(
            ['movie_id'], ['movie.id'], name='fk_movie_genre_movie_id_movie', ondelete='CASCADE'
        ),
        sa.ForeignKeyConstraint(
            ['genre_id'], ['genre.id'], name='fk_movie_genre_genre_id_genre', ondelete='CASCADE'
        ),
        sa.PrimaryKeyConstraint('movie_id', 'genre_id', name='pk_movie_genre'),
    )

    # ========== Halls ==========

    op.create_table(
        'hall',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_hall'),
        sa.UniqueConstraint('name', name='uq_hall_name'),
    )

    op.create_table(
        'seat',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('hall_id', sa.Integer(), nullable=False),
        sa.Column('row', sa.Integer(), nullable=False),
        sa.Column('number', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(
            ['hall_id'], ['hall.id'], name='fk_seat_hall_id_hall', ondelete='CASCADE'
        ),
        sa.PrimaryKeyConstraint('id', name='pk_seat'),
        sa.UniqueConstraint('hall_id', 'row', 'number', name='uq_seat_hall_id_row_number'),
    )
    op.create_index('ix_seat_hall_id', 'seat', ['hall_id'])

    # ========== Showtimes ==========

    op.create_table(
        'showtime',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('movie_id', sa.Integer(), nullable=False),
        sa.Column('hall_id', sa.Integer(), nullable=False),
        sa.Column('time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('price', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column(
            'created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False
        ),
        sa.Column(
            'updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False
        ),
        sa.ForeignKeyConstraint(['movie_id'], ['movie.id'], name='fk_showtime_movie_id_movie'),
        sa.ForeignKeyConstraint(['hall_id'], ['hall.id'], name='fk_showtime_hall_id_hall'),
        sa.PrimaryKeyConstraint('id', name='pk_showtime'),
    )
    op.create_index('ix_showtime_movie_id', 'showtime', ['movie_id'])
    op.create_index('ix_showtime_hall_id_time', 'showtime', ['hall_id', 'time'])

    # ========== Bookings ==========

    op.create_table(
        'booking',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('showtime_id', sa.Integer(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('unit_price', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('total_price', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column(
            'created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False
        ),
        sa.Column(
            'updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False
        ),
        sa.ForeignKeyConstraint(
            ['showtime_id'], ['showtime.id'], name='fk_booking_showtime_id_showtime'
        ),
        sa.PrimaryKeyConstraint('id', name='pk_booking'),
    )
    op.create_index('ix_booking_showtime_id_status', 'booking', ['showtime_id', 'status'])
    op.create_index('ix_booking_user_id_created_at', 'booking', ['user_id', 'created_at'])

    op.create_table(
        'booking_seat',
        sa.Column('booking_id', sa.Integer(), nullable=False),
        sa.Column('seat_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(
            ['booking_id'], ['booking.id'], name='fk_booking_seat_booking_id_booking', ondelete='CASCADE'
        ),
        sa.ForeignKeyConstraint(['seat_id'], ['seat.id'], name='fk_booking_seat_seat_id_seat'),
        sa.PrimaryKeyConstraint('booking_id', 'seat_id', name='pk_booking_seat'),
    )
    op.create_index('ix_booking_seat_seat_id', 'booking_seat', ['seat_id'])


def downgrade() -> None:
    op.drop_index('ix_booking_seat_seat_id', table_name='booking_seat')
    op.drop_table('booking_seat')
    op.drop_index('ix_booking_user_id_created_at', table_name='booking')
    op.drop_index('ix_booking_showtime_id_status', table_name='booking')
    op.drop_table('booking')
    op.drop_index('ix_showtime_hall_id_time', table_name='showtime')
    op.drop_index('ix_showtime_movie_id', table_name='showtime')
    op.drop_table('showtime')
    op.drop_index('ix_seat_hall_id', table_name='seat')
    op.drop_table('seat')
    op.drop_table('hall')
    op.drop_table('movie_genre')
    op.drop_index('ix_movie_title', table_name='movie')
    op.drop_table('movie')
    op.drop_table('genre')
