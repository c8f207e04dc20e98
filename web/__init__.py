"""
Web application package for the NullShot chess backend.

Provides the FastAPI REST API the browser frontend calls for engine moves.
"""
