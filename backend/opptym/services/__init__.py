"""
Business logic services for Opptym.
"""
