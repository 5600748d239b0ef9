"""
Utility modules for parameter validation and result collection.
"""
