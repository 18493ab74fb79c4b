"""
Simple development server for the Games Zone API.
Runs the FastAPI app with auto-reload.
"""

import os

import uvicorn

HOST = os.environ.get("HOST", "127.0.0.1")
PORT = int(os.environ.get("PORT", "8000"))

if __name__ == "__main__":
    print(f"Serving at http://{HOST}:{PORT}")
    print(f"Open http://{HOST}:{PORT}/docs to try the API")
    print("Press Ctrl+C to stop")
    uvicorn.run("backend.api.main:app", host=HOST, port=PORT, reload=True)
