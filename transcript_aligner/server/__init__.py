"""HTTP API for the transcript aligner.

WHY: Tools that cannot import the Python package (the browser editor,
n8n, curl) need alignment over HTTP.

HOW: app.py defines the FastAPI application and routes; models.py holds
the Pydantic request/response schemas. Run it with the
transcript-aligner-api console script (uvicorn).

RULES:
- Handlers are stateless; every request runs one independent alignment
- Validation errors map to 422, unknown formats to 404
"""
