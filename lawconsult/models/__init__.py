"""
Data models for LawConsult
"""
