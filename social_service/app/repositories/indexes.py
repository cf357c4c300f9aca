from __future__ import annotations

from pymongo import ASCENDING, DESCENDING, IndexModel
from pymongo.database import Database


def ensure_indexes(db: Database) -> None:
    """social-service 가 사용하는 컬렉션의 인덱스를 생성한다.

    MongoDB 가 동일 인덱스 재생성을 무시하므로 기동 시마다 호출해도 안전하다.
    """

    db["users"].create_indexes(
        [
            IndexModel([("email", ASCENDING)], name="uniq_email", unique=True),
            IndexModel([("user_id", ASCENDING)], name="uniq_user_id", unique=True),
            IndexModel([("name", ASCENDING)], name="idx_name"),
            IndexModel([("role", ASCENDING)], name="idx_role"),
        ]
    )

    db["profiles"].create_indexes(
        [IndexModel([("user", ASCENDING)], name="uniq_user", unique=True)]
    )

    db["point_analytics"].create_indexes(
        [
            IndexModel(
                [("user", ASCENDING), ("timestamp", ASCENDING)],
                name="idx_user_timestamp",
            ),
            IndexModel(
                [("user", ASCENDING), ("room_id", ASCENDING), ("timestamp", ASCENDING)],
                name="idx_user_room_timestamp",
            ),
        ]
    )

    db["credits_history"].create_indexes(
        [
            IndexModel(
                [("user", ASCENDING), ("date", DESCENDING)],
                name="idx_user_date_desc",
            )
        ]
    )

    db["stores"].create_indexes(
        [IndexModel([("section_name", ASCENDING)], name="uniq_section_name", unique=True)]
    )

    db["level_system"].create_indexes(
        [IndexModel([("level", ASCENDING)], name="uniq_level", unique=True)]
    )

    db["agencies"].create_indexes(
        [IndexModel([("admin", ASCENDING)], name="idx_admin")]
    )

    db["groups"].create_indexes(
        [IndexModel([("admin", ASCENDING)], name="idx_admin")]
    )
