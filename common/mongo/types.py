from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from bson import ObjectId
from bson.errors import InvalidId
from pydantic import BaseModel, ConfigDict, Field
from pydantic.functional_validators import BeforeValidator
from typing_extensions import Annotated


def ensure_utc_datetime(value: datetime) -> datetime:
    """datetime 값을 UTC 기준으로 정규화한다.

    - tzinfo 가 없으면 UTC 로 간주해 tzinfo=UTC 를 부여
    - tzinfo 가 있으면 UTC 로 변환
    """

    if isinstance(value, str):
        value = datetime.fromisoformat(value)
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_object_id(value: Any) -> ObjectId:
    """str / ObjectId 를 MongoDB ObjectId 로 변환한다. 잘못된 값이면 ValueError."""

    if isinstance(value, ObjectId):
        return value
    if value is None:
        raise TypeError("ObjectId cannot be None")
    try:
        return ObjectId(str(value))
    except InvalidId as exc:
        raise ValueError(f"invalid ObjectId: {value!r}") from exc


def from_object_id(value: Optional[ObjectId]) -> Optional[str]:
    if value is None:
        return None
    return str(value)


def to_object_ids(values: list[Any]) -> list[ObjectId]:
    return [to_object_id(v) for v in values]


def is_object_id(value: Any) -> bool:
    return isinstance(value, ObjectId) or (
        isinstance(value, str) and ObjectId.is_valid(value)
    )


PyObjectId = Annotated[ObjectId, BeforeValidator(to_object_id)]
MongoDateTime = Annotated[datetime, BeforeValidator(ensure_utc_datetime)]


class BaseDocument(BaseModel):
    """MongoDB 도큐먼트용 공통 베이스 모델.

    - ObjectId 같은 임의 타입을 허용
    - alias 기반 직렬화(by_alias)를 사용할 수 있도록 한다.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, populate_by_name=True)

    id: Optional[PyObjectId] = Field(default=None, alias="_id")
    created_at: MongoDateTime
    updated_at: MongoDateTime

    def to_mongo_record(self) -> dict[str, Any]:
        """MongoDB 저장에 사용할 레코드(dict) 직렬화.

        - by_alias=True 로 id -> _id 필드 이름을 맞춘다.
        - _id 가 None 이면 제거해 Mongo 가 ObjectId 를 생성하도록 한다.
        """

        record = self.model_dump(by_alias=True)
        if record.get("_id") is None:
            record.pop("_id", None)
        return record

    def to_plain(self) -> dict[str, Any]:
        """도메인 모델 검증용 dict. ObjectId 는 문자열로, _id 는 id 로 내보낸다."""

        return stringify_object_ids(self.model_dump())


class EmbeddedDocument(BaseModel):
    """_id / created_at 이 없는 하위 도큐먼트(배열 원소 등)용 베이스."""

    model_config = ConfigDict(arbitrary_types_allowed=True, populate_by_name=True)


def stringify_object_ids(value: Any) -> Any:
    """dict/list 를 재귀적으로 돌며 ObjectId 를 문자열로 바꾼다."""

    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, dict):
        return {key: stringify_object_ids(item) for key, item in value.items()}
    if isinstance(value, list):
        return [stringify_object_ids(item) for item in value]
    return value
