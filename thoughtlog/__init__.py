"""
Thoughtlog - free-text thought journal with LLM orchestration.

This package contains all application source code organized by responsibility:
- api/       : FastAPI routes and HTTP handling
- core/      : Configuration, logging, errors, auth and cross-cutting utilities
- services/  : Categorization, category resolution and insight orchestration
- llm/       : Provider clients, provider selection, prompts and response parsing
- database/  : Keyed record store backed by SQLAlchemy
- models/    : Pydantic models for request/response schemas
"""

__version__ = "0.1.0"
