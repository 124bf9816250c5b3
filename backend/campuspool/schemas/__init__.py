"""API Schemas — pydantic request/response models; camelCase on the wire."""
