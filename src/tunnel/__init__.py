"""Tunnel provider abstraction for the public webhook URL.

Supports ngrok and already-public hosts.
"""

from .base import TunnelProvider
from .factory import get_tunnel_provider

__all__ = ["TunnelProvider", "get_tunnel_provider"]
