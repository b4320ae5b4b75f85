"""Dependency injection for services."""

from wenshi.services.envelope import EnvelopeCodec
from wenshi.services.file_store import FileStore
from wenshi.services.validator import ContentValidator


class ServiceContainer:
    """Container for service instances."""

    def __init__(self) -> None:
        """Initialize service container."""
        self.validator = ContentValidator()
        self.codec = EnvelopeCodec(validator=self.validator)
        self.file_store = FileStore(codec=self.codec, validator=self.validator)


services = ServiceContainer()
