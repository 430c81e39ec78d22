# scripts/promote_admin.py
# Выдаёт роль администратора напрямую в БД. Нужен для первого администратора:
# по HTTP повышать роль может только уже существующий администратор.
import sys

from fitness_api.core.config import load_settings
from fitness_api.db.session import build_engine, build_session_factory
from fitness_api.models.user import User


def promote(session_factory, email: str) -> bool:
    db = session_factory()
    try:
        user = db.query(User).filter(User.email == email).first()
        if user is None:
            return False
        user.is_admin = True
        db.commit()
        return True
    finally:
        db.close()


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    if len(argv) != 1:
        print('Usage: python -m scripts.promote_admin <email>')
        return 2
    engine = build_engine(load_settings().DATABASE_URL)
    try:
        if not promote(build_session_factory(engine), argv[0]):
            print('User not found:', argv[0])
            return 1
    finally:
        engine.dispose()
    print('User promoted to admin:', argv[0])
    return 0

if __name__ == '__main__':
    sys.exit(main())
