"""In-memory repository useful for development and unit tests."""

from __future__ import annotations

import copy
from typing import Dict, List, Tuple

from thisaicodes.application.use_cases import GenerationRepository
from thisaicodes.domain.models.generation import Generation


class InMemoryGenerationRepository(GenerationRepository):
    def __init__(self) -> None:
        self._store: Dict[str, Generation] = {}

    def add(self, generation: Generation) -> None:
        self._store[generation.id] = copy.deepcopy(generation)

    def save_completed(self, generation: Generation) -> None:
        self._store[generation.id] = copy.deepcopy(generation)

    def save_failed(self, generation: Generation) -> None:
        self._store[generation.id] = copy.deepcopy(generation)

    def get(self, generation_id: str, *, account_id: int) -> Generation:
        generation = self._store[generation_id]
        if generation.account_id != account_id:
            raise KeyError(generation_id)
        return generation

    def list_for_account(
        self, account_id: int, *, limit: int, offset: int
    ) -> Tuple[List[Generation], int]:
        owned = sorted(
            (item for item in self._store.values() if item.account_id == account_id),
            key=lambda item: item.created_at,
            reverse=True,
        )
        return owned[offset : offset + limit], len(owned)
