"""Backend entrypoint. Starts uvicorn with the port from env or settings."""
import os
import uvicorn

from cashflow.config.settings import get_settings
from cashflow.main import app


def main() -> None:
    port = int(os.environ.get("BACKEND_PORT", get_settings().port))
    uvicorn.run(app, host="127.0.0.1", port=port)


if __name__ == "__main__":
    main()
