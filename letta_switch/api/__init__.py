from letta_switch.api.client import LettaAPIClient

__all__ = ["LettaAPIClient"]
