"""Run the relay with uvicorn: ``python -m voice_relay``."""

from __future__ import annotations

import uvicorn

from voice_relay.runtime.settings_loader import load_settings


def main() -> None:
    server = load_settings().server
    uvicorn.run("voice_relay.server:app", host=server.host, port=server.port)


if __name__ == "__main__":
    main()
