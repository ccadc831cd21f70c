#!/usr/bin/env python3
"""
Development server launcher for the construction site API.

This script starts the FastAPI server with auto-reload for development.
For production, run uvicorn (or another ASGI server) against src.api.main:app directly.
"""

import uvicorn
from pathlib import Path

project_root = Path(__file__).parent
src_path = project_root / "src"

if __name__ == "__main__":
    print("Starting Construction Site API Development Server")
    print(f"Project root: {project_root}")
    print("Server will be available at: http://localhost:8000")
    print("API documentation at: http://localhost:8000/docs")
    print("Alternative docs at: http://localhost:8000/redoc")
    print("\n" + "="*50 + "\n")

    uvicorn.run(
        "src.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,     # development only
        reload_dirs=[str(src_path), str(project_root / "templates")],
        log_level="info"
    )
