from __future__ import annotations

import logging
import re
import secrets

from ..exceptions import IdGenerationExhaustedError


logger = logging.getLogger(__name__)


USER_ID_LENGTH = 10
USER_ID_ALPHABET = "0123456789"
DEFAULT_MAX_ATTEMPTS = 100

# 같은 숫자가 3번 이상 연속되는 경우
_REPEATED_RUN_RE = re.compile(r"(.)\1\1")


def has_repeated_run(candidate: str) -> bool:
    return _REPEATED_RUN_RE.search(candidate) is not None


def _draw(length: int) -> str:
    return "".join(secrets.choice(USER_ID_ALPHABET) for _ in range(length))


def generate_user_id(max_attempts: int = DEFAULT_MAX_ATTEMPTS) -> str:
    """10자리 숫자 공개 ID 를 생성한다.

    - 같은 숫자가 3번 이상 연속되는 후보는 버리고 다시 뽑는다.
    - max_attempts 번 안에 통과하는 후보가 없으면 IdGenerationExhaustedError.
    - 저장소 유니크 여부는 확인하지 않는다. (호출자가 unique 인덱스 충돌 시 재시도)
    """

    if max_attempts <= 0:
        raise ValueError("max_attempts must be positive")

    for attempt in range(1, max_attempts + 1):
        candidate = _draw(USER_ID_LENGTH)
        if not has_repeated_run(candidate):
            if attempt > 1:
                logger.debug("user id accepted after %d attempts", attempt)
            return candidate

    raise IdGenerationExhaustedError(
        f"failed to generate user id within {max_attempts} attempts"
    )
