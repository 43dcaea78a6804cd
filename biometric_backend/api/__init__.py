"""
API layer for the Biometric Enrollment Backend.

Exposes HTTP endpoints under /api/v1 (enrollments, health).
"""
