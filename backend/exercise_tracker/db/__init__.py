"""Database Metadata - declarative Base shared by the ORM models."""
