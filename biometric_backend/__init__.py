"""
Biometric Enrollment Backend - root package.

This package contains the FastAPI app entry point (main.py), API routes,
domain logic (models, repositories, vector validation) and the MongoDB
infrastructure behind the one-shot enrollment transaction.
"""
