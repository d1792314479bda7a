"""
MODGEN CLI

Command-line interface for module generation.
"""
