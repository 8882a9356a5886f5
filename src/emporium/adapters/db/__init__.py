"""SQLAlchemy plumbing shared by the relational adapters."""
