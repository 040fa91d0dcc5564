"""
Shared utilities: logging setup, log sanitizing, display formatters
"""
