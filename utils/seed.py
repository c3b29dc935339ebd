from sqlalchemy import inspect

from models import db
from models.user import Role

OWNER = "OWNER"
WALKER = "WALKER"
ADMIN = "ADMIN"

DEFAULT_ROLES = [OWNER, WALKER, ADMIN]
SELF_SERVICE_ROLES = {OWNER, WALKER}

def seed_roles():
    # fresh database before `flask db upgrade`
    if not inspect(db.engine).has_table(Role.__tablename__):
        return
    existing = {r.name for r in Role.query.all()}
    for name in DEFAULT_ROLES:
        if name not in existing:
            db.session.add(Role(name=name))
    db.session.commit()
