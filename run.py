"""Development entry point.

Usage:
    python run.py
"""
import uvicorn


if __name__ == "__main__":
    uvicorn.run("pulse.app:app", host="0.0.0.0", port=8000, reload=True)
