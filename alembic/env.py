"""Alembic environment. Runs migrations over the sync psycopg driver."""

from logging.config import fileConfig

from dotenv import load_dotenv
load_dotenv('.env', override=False)

from alembic import context
from sqlalchemy import engine_from_config, pool

from fca_fines.config import settings
from fca_fines.db.models import Base

config = context.config
config.set_main_option("sqlalchemy.url", settings.db.sync_connection_string.replace("%", "%%"))

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    """Emit SQL to stdout without a database connection."""
    context.configure(
        url=config.get_main_option("sqlalchemy.url"),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
