"""
Core utilities for Opptym.
"""
