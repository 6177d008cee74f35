"""
REST API for REDCF.

A thin FastAPI service over the analysis engine.
"""
