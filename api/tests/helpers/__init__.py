"""
Test helpers package for FormCanvas

Provides reusable helpers for:
- Canvas tree factories (factories.py)
"""
