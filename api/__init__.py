"""
Minimal API (FastAPI)

HTTP API for Merkle root derivation:
- POST /root - Derive a root
- POST /verify - Verify a root
- GET /algorithms - List hash algorithms
- GET /health - Health check

Usage:
    uvicorn api.app:app --reload
"""

__version__ = "0.1.0"
