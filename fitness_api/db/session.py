# fitness_api/db/session.py
# Фабрики SQLAlchemy engine и сессий. Ничего не создаётся при импорте:
# engine строится из Settings в create_app и живёт в app.state.
# Поддерживает как Postgres, так и SQLite (для тестов/локального использования).

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker


def build_engine(database_url: str) -> Engine:
    # Для sqlite требуется connect_args; для Postgres пустой dict
    connect_args = {"check_same_thread": False} if database_url.startswith("sqlite") else {}

    # pool_pre_ping полезен для долгоживущих соединений с Postgres
    return create_engine(
        database_url,
        connect_args=connect_args,
        pool_pre_ping=True,
    )


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)
