"""
Lancement local: `python -m locket`.

Variables lues: HOST (0.0.0.0), PORT (8000), UVICORN_RELOAD (1/true/yes), LOG_LEVEL (info).
En production on préfère `uvicorn locket.asgi:app` derrière le proxy.
"""
import os
import uvicorn

def main() -> None:
    uvicorn.run(
        "locket.asgi:app",
        host=os.environ.get("HOST", "0.0.0.0"),
        port=int(os.environ.get("PORT", 8000)),
        reload=os.environ.get("UVICORN_RELOAD", "").lower() in ("1", "true", "yes"),
        log_level=os.environ.get("LOG_LEVEL", "info"),
        proxy_headers=True,
    )

if __name__ == "__main__":
    main()
