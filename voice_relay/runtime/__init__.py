"""Runtime package.

Keep this module dependency-light: importing `voice_relay.runtime.*` from unit
tests should not open sockets or require credentials.
"""

__all__: list[str] = []
