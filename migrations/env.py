import importlib
import logging
import pkgutil
from logging.config import fileConfig
from pathlib import Path

from flask import current_app
from alembic import context

config = context.config


def _init_logging():
    ini = config.config_file_name
    if ini and Path(ini).exists():
        fileConfig(ini)
        return
    logging.basicConfig(level=logging.INFO)


_init_logging()
logger = logging.getLogger("alembic.env")


def get_engine():
    # Flask-SQLAlchemy >= 3 exposes the engine directly
    return current_app.extensions["migrate"].db.engine


def get_engine_url():
    return get_engine().url.render_as_string(hide_password=False).replace("%", "%%")


# Alembic needs a URL in offline mode
config.set_main_option("sqlalchemy.url", get_engine_url())
target_db = current_app.extensions["migrate"].db


def _load_models():
    """Import every feedback_portal.models module so autogenerate sees all tables."""
    import feedback_portal.models as models_pkg
    for m in pkgutil.iter_modules(models_pkg.__path__):
        importlib.import_module(f"feedback_portal.models.{m.name}")


def _include_object(object, name, type_, reflected, compare_to):
    # Never propose dropping an index that only exists in the database
    if type_ == "index" and reflected and compare_to is None:
        return False
    return True


def run_migrations_offline():
    _load_models()
    context.configure(
        url=config.get_main_option("sqlalchemy.url"),
        target_metadata=target_db.metadata,
        literal_binds=True,
        compare_type=True,
        include_object=_include_object,
        render_as_batch=True,
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online():
    def process_revision_directives(context_, revision, directives):
        # No empty revision files from autogenerate
        if getattr(config.cmd_opts, "autogenerate", False):
            script = directives[0]
            if script.upgrade_ops.is_empty():
                directives[:] = []
                logger.info("No changes in schema detected.")

    conf_args = {
        **current_app.extensions["migrate"].configure_args,
        "process_revision_directives": process_revision_directives,
        "compare_type": True,
        "include_object": _include_object,
        "render_as_batch": True,  # SQLite needs batch mode for ALTERs
    }

    _load_models()
    with get_engine().connect() as connection:
        context.configure(connection=connection, target_metadata=target_db.metadata, **conf_args)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
