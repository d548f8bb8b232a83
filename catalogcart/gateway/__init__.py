from .config import GatewaySettings, get_settings
from .memory import InMemoryGateway
from .rest import RestGateway

__all__ = ["GatewaySettings", "InMemoryGateway", "RestGateway", "get_settings"]
