"""
API Middleware - Request/response processing

Holds the exception handlers that turn engine errors into HTTP responses.
"""
