# backend/alembic/env.py
from logging.config import fileConfig
import os, sys
from alembic import context

# backend/ on sys.path so that `packhub` imports without installing
BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if BASE_DIR not in sys.path:
    sys.path.insert(0, BASE_DIR)

# migrations run against the application's engine (DATABASE_URL)
from packhub.core.db import engine as app_engine, Base
from packhub import models  # noqa: F401  (fills Base.metadata)

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def _options() -> dict:
    return dict(
        target_metadata=target_metadata,
        compare_type=True,
        compare_server_default=False,
        # SQLite cannot ALTER constraints in place
        render_as_batch=(app_engine.dialect.name == "sqlite"),
    )


def run_migrations_offline():
    """Emit SQL to stdout instead of executing it."""
    context.configure(url=str(app_engine.url), literal_binds=True, **_options())
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online():
    with app_engine.connect() as connection:
        context.configure(connection=connection, **_options())
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
