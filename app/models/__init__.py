# app/models/__init__.py
# Import all models so Base.metadata knows every table (Alembic, create_all)

from app.db.base_class import Base
from app.models.visit import Visit
from app.models.waitlist import WaitlistEntry
