"""Database models, schemas and engine helpers."""
