"""
Run the API server.

Usage:
    python -m hobby_helper
"""
from __future__ import annotations

import uvicorn

from .config import get_settings


def main() -> None:
    uvicorn.run(
        "hobby_helper.app:app",
        host="0.0.0.0",
        port=get_settings().port,
    )


if __name__ == "__main__":
    main()
