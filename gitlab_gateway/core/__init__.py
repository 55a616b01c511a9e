"""
Core infrastructure: configuration, logging, and exceptions.
"""
