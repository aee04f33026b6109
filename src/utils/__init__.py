"""
Utility modules for the review service.

Cross-cutting concerns:
- Storage: seed dataset loading, snapshots and report files
"""
