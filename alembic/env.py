# alembic/env.py
# Конфигурация Alembic для управления миграциями БД

import sys
import logging
from pathlib import Path

# Добавляем корень проекта в sys.path, чтобы импортировать пакет fitness_api
# Предполагается, что alembic/ находится в корне проекта
project_root = Path(__file__).resolve().parents[1]
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

# Импортируем конфигурацию и модели один раз
from fitness_api.core.config import load_settings
from fitness_api.db.base import Base

# Импорт моделей, чтобы они были зарегистрированы в Base.metadata
import fitness_api.models.user  # noqa: F401
import fitness_api.models.workout  # noqa: F401

settings = load_settings()

from logging.config import fileConfig
from sqlalchemy import engine_from_config, pool
from alembic import context

config = context.config

# Без ini-файла (например, в тестах) логирование не перенастраиваем
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

logger = logging.getLogger('alembic.env')

# Устанавливаем DATABASE_URL из настроек приложения
config.set_main_option("sqlalchemy.url", settings.DATABASE_URL)

# Этот объект представляет метаданные SQLAlchemy
target_metadata = Base.metadata


def run_migrations_offline() -> None:
    """Offline: только URL, без подключения; SQL печатается в вывод."""
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Online: подключаемся к DATABASE_URL и применяем миграции."""
    # Секция ini (если есть) плюс URL из настроек приложения
    configuration = config.get_section(config.config_ini_section, {})
    configuration["sqlalchemy.url"] = settings.DATABASE_URL

    connectable = engine_from_config(
        configuration,
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            # SQLite не умеет ALTER COLUMN: изменения идут через batch-режим
            render_as_batch=connection.dialect.name == "sqlite",
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    logger.info("Running migrations in OFFLINE mode")
    run_migrations_offline()
else:
    logger.info("Running migrations in ONLINE mode")
    run_migrations_online()