"""Initial staffing portal schema

Revision ID: 001
Revises: 
Create Date: 2026-10-17 09:00:00.000000

"""
from alembic import op

# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    """Create clients, code requests, job postings, activity log and auth tables."""

    op.execute("""
        CREATE TABLE admin_users (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            username VARCHAR(255) UNIQUE NOT NULL,
            hashed_password VARCHAR(255) NOT NULL,
            is_admin BOOLEAN DEFAULT TRUE NOT NULL,
            is_active BOOLEAN DEFAULT TRUE NOT NULL,
            created_at TIMESTAMP DEFAULT NOW() NOT NULL,
            updated_at TIMESTAMP DEFAULT NOW() NOT NULL
        );
    """)

    op.execute("""
        CREATE TABLE revoked_tokens (
            jti VARCHAR(64) PRIMARY KEY,
            revoked_at TIMESTAMP DEFAULT NOW() NOT NULL,
            expires_at TIMESTAMP
        );
    """)

    # Access codes are unique across active and deactivated clients
    op.execute("""
        CREATE TABLE clients (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            company_name VARCHAR(255) NOT NULL,
            contact_name VARCHAR(255) NOT NULL,
            email VARCHAR(255) NOT NULL,
            phone VARCHAR(50),
            access_code VARCHAR(64) UNIQUE NOT NULL,
            is_active BOOLEAN DEFAULT TRUE NOT NULL,
            login_count INTEGER DEFAULT 0 NOT NULL,
            last_login_at TIMESTAMP,
            code_expires_at TIMESTAMP,
            created_at TIMESTAMP DEFAULT NOW() NOT NULL,
            updated_at TIMESTAMP DEFAULT NOW() NOT NULL
        );
    """)

    op.execute("""
        CREATE TABLE code_requests (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            company_name VARCHAR(255) NOT NULL,
            contact_name VARCHAR(255) NOT NULL,
            email VARCHAR(255) NOT NULL,
            phone VARCHAR(50),
            reason TEXT,
            status VARCHAR(20) DEFAULT 'pending' NOT NULL
                CHECK (status IN ('pending', 'approved', 'rejected')),
            rejection_reason TEXT,
            reviewed_by UUID REFERENCES admin_users(id),
            reviewed_at TIMESTAMP,
            client_id UUID REFERENCES clients(id),
            created_at TIMESTAMP DEFAULT NOW() NOT NULL
        );
    """)

    op.execute("""
        CREATE TABLE job_postings (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            contact_name VARCHAR(255) NOT NULL,
            company_name VARCHAR(255) NOT NULL,
            email VARCHAR(255) NOT NULL,
            phone VARCHAR(50) NOT NULL,
            job_title VARCHAR(255) NOT NULL,
            location VARCHAR(255) NOT NULL,
            employment_type VARCHAR(30) NOT NULL
                CHECK (employment_type IN ('permanent', 'temporary', 'contract-to-hire')),
            is_existing_client BOOLEAN DEFAULT FALSE NOT NULL,
            job_description TEXT,
            salary_range VARCHAR(100),
            special_requirements TEXT,
            anticipated_start_date DATE,
            status VARCHAR(30) DEFAULT 'new' NOT NULL
                CHECK (status IN ('new', 'contacted', 'contract_pending', 'posted', 'closed')),
            owner_client_id UUID REFERENCES clients(id),
            created_at TIMESTAMP DEFAULT NOW() NOT NULL,
            updated_at TIMESTAMP DEFAULT NOW() NOT NULL,
            CHECK ((owner_client_id IS NOT NULL) = is_existing_client)
        );
    """)

    op.execute("""
        CREATE TABLE client_activities (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            client_id UUID NOT NULL REFERENCES clients(id),
            activity_type VARCHAR(50) NOT NULL,
            ip_address VARCHAR(45),
            user_agent TEXT,
            details JSONB,
            created_at TIMESTAMP DEFAULT NOW() NOT NULL
        );
    """)

    # Create indexes for performance
    op.create_index('ix_admin_users_username', 'admin_users', ['username'])
    op.create_index('ix_clients_access_code', 'clients', ['access_code'])
    op.create_index('ix_code_requests_status', 'code_requests', ['status'])
    op.create_index('ix_job_postings_status', 'job_postings', ['status'])
    op.create_index('ix_job_postings_owner_client_id', 'job_postings', ['owner_client_id'])
    op.create_index('ix_client_activities_client_id', 'client_activities', ['client_id'])

    # Keep updated_at current on every row update
    op.execute("""
        CREATE OR REPLACE FUNCTION update_updated_at_column()
        RETURNS TRIGGER AS $$
        BEGIN
            NEW.updated_at = NOW();
            RETURN NEW;
        END;
        $$ language 'plpgsql';
    """)

    for table in ('admin_users', 'clients', 'job_postings'):
        op.execute(f"""
            CREATE TRIGGER update_{table}_updated_at
                BEFORE UPDATE ON {table}
                FOR EACH ROW
                EXECUTE FUNCTION update_updated_at_column();
        """)


def downgrade() -> None:
    """Drop all staffing portal tables."""

    for table in ('job_postings', 'clients', 'admin_users'):
        op.execute(f"DROP TRIGGER IF EXISTS update_{table}_updated_at ON {table};")
    op.execute("DROP FUNCTION IF EXISTS update_updated_at_column();")

    op.drop_index('ix_client_activities_client_id')
    op.drop_index('ix_job_postings_owner_client_id')
    op.drop_index('ix_job_postings_status')
    op.drop_index('ix_code_requests_status')
    op.drop_index('ix_clients_access_code')
    op.drop_index('ix_admin_users_username')

    op.execute("DROP TABLE IF EXISTS client_activities;")
    op.execute("DROP TABLE IF EXISTS job_postings;")
    op.execute("DROP TABLE IF EXISTS code_requests;")
    op.execute("DROP TABLE IF EXISTS clients;")
    op.execute("DROP TABLE IF EXISTS revoked_tokens;")
    op.execute("DROP TABLE IF EXISTS admin_users;")
