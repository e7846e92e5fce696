"""
Feature modules for Track Export.

Each feature is a self-contained module with:
- models.py - SQLAlchemy models (optional)
- schemas.py - Pydantic schemas
- service.py / importer.py - Business logic
- repository.py - Data access (optional)
- writers/ - Document formats (export only)
"""
