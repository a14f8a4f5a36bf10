"""
crud-app Application Package

A small CRUD service for books (plus user sign-up/sign-in) built on
FastAPI and SQLAlchemy.

Package Structure:
- config.py: Application configuration using Pydantic Settings
- logging_config.py: Logging setup for the process
- database.py: SQLAlchemy engine, session factory and table creation
- exceptions.py: Domain errors raised by repositories and services
- main.py: FastAPI application factory, lifespan and server runner
- dependencies.py: Dependency injection wiring (session -> repo -> service)
- models/: SQLAlchemy table mappings
- schemas/: Pydantic request/response schemas
- repositories/: Parameterized SQL statements against the store
- services/: Business rules on top of the repositories
- routers/: HTTP handlers
"""

__version__ = "0.1.0"
