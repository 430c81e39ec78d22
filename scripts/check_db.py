# scripts/check_db.py
# Проверяет подключение к DATABASE_URL из настроек приложения
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from fitness_api.core.config import load_settings
from fitness_api.db.session import build_engine


def main():
    url = load_settings().DATABASE_URL
    print('Trying to connect to:', url)
    engine = build_engine(url)
    try:
        with engine.connect() as conn:
            print('Connection OK, SELECT 1 ->', conn.execute(text("SELECT 1")).scalar())
    except SQLAlchemyError as e:
        print('Connection failed:', e)
    finally:
        engine.dispose()

if __name__ == '__main__':
    main()
