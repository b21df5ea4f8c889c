"""Business logic layer for files app.

This package contains the upload pipeline:
- Canonical storage paths for owners, folders and blobs
- Single file ingestion under an optional parent folder
- Folder ingestion with a best-effort per-file policy

All business logic should be implemented here, separate from
models (data layer) and infrastructure (external systems).
"""
