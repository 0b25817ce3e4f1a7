"""
Shared module package.

Contains cross-cutting concerns used across bounded contexts:
- Error translation (exception to HTTP response)
- Security middleware
- Rate limiting
- Logging configuration
"""
