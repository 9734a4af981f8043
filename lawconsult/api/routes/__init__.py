"""
API route modules
"""

__all__ = ["admin", "auth", "consultations", "lawyers", "payments"]
