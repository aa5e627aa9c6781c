"""
Backend package for the logo studio API.

FastAPI application with a database abstraction (SQLAlchemy or in-memory)
serving users, logos, layers, categories and assets. Localization and
response shaping live in `logo_shared`.
"""
