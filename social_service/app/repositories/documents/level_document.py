from __future__ import annotations

from common.mongo.types import BaseDocument

from ...models.level import LevelThreshold


class LevelThresholdDocument(BaseDocument):
    """MongoDB level_system 컬렉션 도큐먼트 모델."""

    level: int
    fame_threshold: int
    rich_threshold: int

    def to_domain(self) -> LevelThreshold:
        return LevelThreshold.model_validate(self.to_plain())
