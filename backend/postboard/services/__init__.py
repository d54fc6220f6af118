"""
PostBoard Backend - Services Layer
===================================

What:  Business rules between the routes (HTTP) and the models (persistence).

Service Inventory:
    - UserService:     signup (validated), upsert (unvalidated), lookups
    - PostService:     create, owner-only soft delete, listings, aggregates
    - CommentService:  bulk create, owner-only update, find-or-create, search
    - authorization:   the shared ownership check used by both mutations

Services receive the request's AsyncSession, flush but never commit, and
raise postboard.exceptions errors instead of returning status codes.
"""
