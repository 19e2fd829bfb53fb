"""Shared code for the ESHS compliance dashboard.

This package contains the parts of the application that do not depend on Flask:

- Database models (models.py) - SQLAlchemy declarative models for every record type
- Enums (enums.py) - Enumeration definitions for status values and categories
- Validation utilities (validation.py, schemas.py) - Input validation and sanitization

The Flask API in ``eshs_api`` builds its resource endpoints on top of these.
"""
