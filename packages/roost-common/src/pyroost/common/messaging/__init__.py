from .bus import MessageBus, MessageStore, Renderer, bus

__all__ = ["MessageBus", "MessageStore", "Renderer", "bus"]
