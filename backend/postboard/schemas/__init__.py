"""
PostBoard Backend - Pydantic Request/Response Schemas
======================================================

Schemas are separate from the SQLAlchemy models: they decide which columns
each endpoint exposes (e.g. role and password never leave through read paths)
and they define the camelCase JSON contract.
"""
