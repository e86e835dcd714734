"""
Domain package - Core business logic with no external dependencies.

This package contains pure Python models and rules for validating fiscal
receipt check URLs and extracting the parameters they attest to.
"""
