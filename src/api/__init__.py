"""
FastAPI application layer for the construction company website.

Serves the public submission funnels (contact, testimonials, quotes, newsletter),
project galleries and the admin back-office endpoints.
"""
