from __future__ import annotations

from fastapi import Header, HTTPException, status


def get_current_user_id(
    x_user_id: str | None = Header(default=None, alias="X-User-Id"),
) -> str:
    """게이트웨이가 넣어주는 X-User-Id(공개 user_id) 헤더에서 요청 유저를 꺼낸다."""

    if not x_user_id or not x_user_id.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="missing X-User-Id header",
        )
    return x_user_id.strip()
