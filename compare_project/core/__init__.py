"""
Core models and project file handling.
"""
