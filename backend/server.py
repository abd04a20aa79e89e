import sys
import os
import uvicorn

# Ensure we are in the correct directory (backend)
current_dir = os.path.dirname(os.path.abspath(__file__))
sys.path.append(current_dir)


def main():
    """Production server launcher (no reload)."""
    port = int(os.getenv("PORT", "8000"))
    print(f"[*] Starting Uvicorn server (port {port})...")
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=port,
        reload=False,
        loop="asyncio"
    )


if __name__ == "__main__":
    main()
