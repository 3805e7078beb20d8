"""Resources de la API StreamSend.

Por qué un paquete:
- Agrupa el contexto (credenciales + transporte + cache) y los resources que
  lo consumen.
- Cada resource concreto hereda de `Resource`.
"""

from streamsend.adapters.api.audience import Audience
from streamsend.adapters.api.context import ApiContext, configure, get_context, reset_context
from streamsend.adapters.api.resource import Resource
from streamsend.adapters.api.subscriber import Subscriber

__all__ = [
    "ApiContext",
    "Audience",
    "Resource",
    "Subscriber",
    "configure",
    "get_context",
    "reset_context",
]
