"""
API models - pydantic request/response shapes for the HTTP layer
"""
