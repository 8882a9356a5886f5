"""Alembic environment and migration scripts for the EMPORIUM schema."""
