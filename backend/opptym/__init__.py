"""
Opptym SEO platform backend.
"""
