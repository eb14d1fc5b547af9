"""
FormCanvas

Canvas layout engine for the form builder: drop classification, immutable
component-tree rewriting with row lifecycle rules, and document validation.
"""

__version__ = "0.1.0"
