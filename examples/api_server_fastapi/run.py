"""Run the FastAPI server using env-based configuration.

Why this wrapper?
-----------------
`uvicorn` CLI flags work fine, but keeping runtime configuration in a `.env`
file next to the API key is often more convenient.

Host and port come from `config.Settings`:
- `ADDRESS_FINDER_API_HOST` (default: 0.0.0.0)
- `ADDRESS_FINDER_API_PORT` (default: 8000)

It then starts Uvicorn with `address_finder.api:app`.

Usage
-----
pip install -e ".[api]"
python examples/api_server_fastapi/run.py
"""

from __future__ import annotations

import uvicorn

from address_finder.api import app
from address_finder.config import Settings, configure_logging

if __name__ == "__main__":
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
