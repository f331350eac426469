"""CLI entry point for launching the FastAPI app with uvicorn."""

import os

import uvicorn


def main() -> None:
    """Run the development server."""
    uvicorn.run(
        "src.server.app:app",
        host=os.getenv("DAYBOOK_HOST", "0.0.0.0"),
        port=int(os.getenv("DAYBOOK_PORT", "8000")),
        reload=True,
        reload_dirs=["src"],
    )


if __name__ == "__main__":
    main()
