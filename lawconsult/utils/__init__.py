"""
Utility functions and helpers
"""
