from thisaicodes.infrastructure.repositories.db import DjangoGenerationRepository
from thisaicodes.infrastructure.repositories.memory import InMemoryGenerationRepository

__all__ = ["DjangoGenerationRepository", "InMemoryGenerationRepository"]
