"""
Main Entry Point for the Arco persona API

Run the FastAPI application with uvicorn.
"""

import uvicorn

if __name__ == "__main__":
    # Use import string to enable reload and workers
    uvicorn.run(
        "arcopersona.api.app:app",
        host="0.0.0.0",
        port=8000,
        reload=True  # Enable auto-reload for development
    )
