# app/db/base_class.py

from sqlalchemy.orm import declarative_base

# Declarative base shared by the visit and waiting-list models;
# Alembic and the test fixtures read Base.metadata.
Base = declarative_base()
