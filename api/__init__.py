"""
Arbor HTTP API (FastAPI)

HTTP API for Merkle roots and inclusion proofs:
- POST /root - Compute the root of submitted blocks
- POST /prove - Generate an inclusion proof for one block
- POST /verify - Verify a block against a proof
- GET /health - Health check

Usage:
    uvicorn api.app:app --reload
"""

__version__ = "0.1.0"
