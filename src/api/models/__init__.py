"""
Pydantic models for API request/response schemas.

These models define the shape of data that flows between the website frontend and
this backend. They are separate from the internal content records to keep the API
contract stable.
"""
