"""
Core: error taxonomy and dependency wiring.
"""
