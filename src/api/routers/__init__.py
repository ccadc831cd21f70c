"""
API route handlers for different endpoint groups.

Each router handles a single area of the site (galleries, submissions, uploads...).
"""
