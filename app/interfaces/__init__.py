"""
Interfaces layer package.

Contains FastAPI routers, Pydantic request/response schemas,
session shapes and input validation. No business logic belongs here.
Routes call use cases and return responses.
"""
