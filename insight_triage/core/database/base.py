# File: insight_triage/core/database/base.py

from sqlalchemy.orm import declarative_base

# The shared registry. Feature table models inherit from this.
Base = declarative_base()
