"""create users, members, registrations tables

Revision ID: a1c2e3g4i501
Revises:
Create Date: 2026-10-18 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import mysql


# revision identifiers, used by Alembic.
revision = 'a1c2e3g4i501'
down_revision = None
branch_labels = None
depends_on = None


# MySQL: マイクロ秒精度の日時, 大文字小文字を区別するメール
timestamp = sa.DateTime().with_variant(mysql.DATETIME(fsp=6), 'mysql')
email_type = sa.String(255).with_variant(mysql.VARCHAR(255, collation='utf8mb4_bin'), 'mysql')

user_role = sa.Enum('Admin', 'Member', name='user_role')
province = sa.Enum('Jawa Timur', 'Jawa Barat', 'Jawa Tengah', name='province')
repository_status = sa.Enum('Belum', 'Sudah', name='repository_status')
accreditation_status = sa.Enum('Akreditasi A', 'Akreditasi B', 'Belum Akreditasi', name='accreditation_status')
membership_status = sa.Enum('Pending', 'Active', 'Inactive', 'Rejected', name='membership_status')
registration_type = sa.Enum('Pendaftaran Baru', 'Perpanjangan', name='registration_type')
payment_status = sa.Enum('Pending', 'Confirmed', 'Rejected', name='payment_status')


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('email', email_type, nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('role', user_role, nullable=False),
        sa.Column('created_at', timestamp, nullable=False),
        sa.Column('updated_at', timestamp, nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    # members: 1ユーザー1会員
    op.create_table(
        'members',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False, comment='1ユーザーにつき1会員'),
        sa.Column('university_name', sa.Text(), nullable=False, comment='大学名'),
        sa.Column('library_head_name', sa.Text(), nullable=False, comment='図書館長名'),
        sa.Column('library_head_phone', sa.String(20), nullable=False),
        sa.Column('pic_name', sa.Text(), nullable=False, comment='担当者 (PIC) 名'),
        sa.Column('pic_phone', sa.String(20), nullable=False),
        sa.Column('institution_address', sa.Text(), nullable=False),
        sa.Column('province', province, nullable=False),
        sa.Column('institution_email', sa.String(255), nullable=False),
        sa.Column('library_website_url', sa.Text(), nullable=True),
        sa.Column('opac_url', sa.Text(), nullable=True, comment='OPAC URL'),
        sa.Column('repository_status', repository_status, nullable=False, comment='リポジトリ連携: Belum=未, Sudah=済'),
        sa.Column('book_collection_count', sa.Integer(), nullable=False, comment='蔵書数'),
        sa.Column('accreditation_status', accreditation_status, nullable=False),
        sa.Column('membership_status', membership_status, nullable=False),
        sa.Column('created_at', timestamp, nullable=False),
        sa.Column('updated_at', timestamp, nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_members_user_id', 'members', ['user_id'], unique=True)

    op.create_table(
        'registrations',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('member_id', sa.Integer(), nullable=False),
        sa.Column('registration_type', registration_type, nullable=False, comment='Pendaftaran Baru=新規, Perpanjangan=更新'),
        sa.Column('payment_proof_url', sa.Text(), nullable=True, comment='振込証明URL (外部ホスト)'),
        sa.Column('payment_status', payment_status, nullable=False),
        sa.Column('admin_notes', sa.Text(), nullable=True),
        sa.Column('receipt_url', sa.Text(), nullable=True, comment='領収書URL'),
        sa.Column('certificate_url', sa.Text(), nullable=True, comment='会員証明書URL'),
        sa.Column('created_at', timestamp, nullable=False),
        sa.Column('updated_at', timestamp, nullable=False),
        sa.ForeignKeyConstraint(['member_id'], ['members.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_registrations_member_id', 'registrations', ['member_id'])


def downgrade() -> None:
    op.drop_index('ix_registrations_member_id', table_name='registrations')
    op.drop_table('registrations')
    op.drop_index('ix_members_user_id', table_name='members')
    op.drop_table('members')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')

    # PostgreSQLのENUM型を削除 (MySQL/SQLiteでは何もしない)
    bind = op.get_bind()
    for enum_type in (payment_status, registration_type, membership_status,
                      accreditation_status, repository_status, province, user_role):
        enum_type.drop(bind, checkfirst=True)
