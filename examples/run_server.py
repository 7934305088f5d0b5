"""
Run the OID4VP frontend API server

Configuration is read from OID4VP_* environment variables; without them a
local test configuration is used.
"""

import logging

import uvicorn

from oid4vp_frontend.api.app import create_app

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)

    print("=" * 60)
    print("Starting OID4VP Frontend API Server")
    print("=" * 60)
    print("\nEndpoints:")
    print("  - Docs: http://localhost:8000/docs")
    print("  - Health: http://localhost:8000/health")
    print("\nTransaction endpoints:")
    print("  - POST /init")
    print("  - GET /result")
    print("\n" + "=" * 60)

    uvicorn.run(
        create_app(),
        host="0.0.0.0",
        port=8000,
        log_level="info",
        access_log=True,
    )
