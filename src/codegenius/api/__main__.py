"""Run the gateway under Uvicorn on the configured port."""

from __future__ import annotations

import uvicorn

from .main import app


def main() -> None:
    uvicorn.run(app, host="0.0.0.0", port=app.state.config.port, log_level="info")


if __name__ == "__main__":
    main()
