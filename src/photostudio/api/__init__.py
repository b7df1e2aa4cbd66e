"""Photo Studio — FastAPI history API layer.

This package contains the FastAPI application and the Pydantic
request/response models for the generation history endpoints.

Modules
-------
main
    FastAPI application with all route handlers and the ``main()`` CLI
    entry point.
models
    Pydantic models for API request and response validation.
"""
