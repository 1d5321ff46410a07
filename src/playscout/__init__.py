"""playscout: KOPIS show ingestion and lifecycle sync."""

__version__ = "0.1.0"
