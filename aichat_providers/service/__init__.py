"""HTTP edge for the chat orchestrator (FastAPI app and dev server)."""
