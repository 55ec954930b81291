# visit-desk-service/app/crud/__init__.py

from .crud_visit import visit
from .crud_waitlist import waitlist
