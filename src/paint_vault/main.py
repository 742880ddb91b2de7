"""Run the paint catalog API under uvicorn."""
from __future__ import annotations

import uvicorn

from .config import get_settings


def run() -> None:
    """Serve :data:`paint_vault.api.app`; also the ``paint-vault`` console script."""

    settings = get_settings()
    uvicorn.run(
        "paint_vault.api:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.environment == "development",
    )


if __name__ == "__main__":
    run()
