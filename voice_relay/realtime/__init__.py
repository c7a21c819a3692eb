from .client import ClientChannel
from .session import ClientSession
from .upstream import UpstreamSession

__all__ = ["ClientChannel", "ClientSession", "UpstreamSession"]
