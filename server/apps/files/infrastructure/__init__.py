"""Infrastructure layer for files app.

This package contains integrations with external systems:
- Blob store capability over S3-compatible storage (S3/MinIO/R2)
- Metadata catalog over the ``FileEntry`` table
- Payload metadata and synthetic blob names

Keep infrastructure concerns separate from business logic.
"""
