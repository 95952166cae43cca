"""
Models

- domain: storage-agnostic dataclasses (Publisher, Contract, ...)
- api: pydantic request/response models for the HTTP layer
"""
