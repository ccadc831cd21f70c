"""
FastAPI dependencies for request processing.

Dependencies hand the shared store, services and admin guard to the endpoints.
"""
