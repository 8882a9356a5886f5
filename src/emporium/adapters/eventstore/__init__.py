"""Event store adapters: the ``event_store`` table plus in-memory and SQLAlchemy stores."""
