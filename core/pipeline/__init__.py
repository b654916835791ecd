"""Message pipeline and service wiring."""

from core.pipeline.container import ServiceContainer
from core.pipeline.pipeline import MessagePipeline

__all__: list[str] = ["MessagePipeline", "ServiceContainer"]
