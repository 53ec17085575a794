import math
from datetime import datetime
from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class ApiModel(BaseModel):
    """Base for wire models: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        from_attributes=True,
    )

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class Record(ApiModel):
    id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class PersonRef(ApiModel):
    id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    badge_number: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name or ''} {self.last_name or ''}".strip()


class LocationData(ApiModel):
    latitude: float
    longitude: float
    address: str = ""
    city: Optional[str] = ""
    district: Optional[str] = ""
    division: Optional[str] = ""

    @property
    def has_coordinates(self) -> bool:
        return -90 <= self.latitude <= 90 and -180 <= self.longitude <= 180


class Location(LocationData):
    id: Optional[str] = None


class VehicleRef(ApiModel):
    id: Optional[str] = None
    plate_no: str
    brand: Optional[str] = None
    model: Optional[str] = None
    owner: Optional[PersonRef] = None
    driver: Optional[PersonRef] = None


class StationRef(ApiModel):
    id: str
    name: str


class Pagination(ApiModel):
    page: int = 1
    limit: int = 20
    total: int = 0
    total_pages: Optional[int] = None


class ResourceList(BaseModel, Generic[T]):
    """One page of a remote collection, in server order."""

    model_config = ConfigDict(frozen=True)

    items: List[T] = Field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 20
    total_pages: int = 0

    @classmethod
    def build(
        cls,
        items: List[T],
        total: Optional[int] = None,
        page: int = 1,
        limit: int = 20,
        total_pages: Optional[int] = None,
    ) -> "ResourceList[T]":
        total = len(items) if total is None else total
        limit = limit or max(len(items), 1)
        if total_pages is None:
            total_pages = math.ceil(total / limit) if limit else 0
        return cls(items=list(items), total=total, page=page, limit=limit, total_pages=total_pages)

    def replace_item(self, item: Any) -> "ResourceList[T]":
        items = [item if getattr(i, "id", None) == getattr(item, "id", None) else i for i in self.items]
        return self.model_copy(update={"items": items})

    def without(self, item_id: str) -> "ResourceList[T]":
        items = [i for i in self.items if getattr(i, "id", None) != item_id]
        if len(items) == len(self.items):
            return self
        total = max(0, self.total - 1)
        total_pages = math.ceil(total / self.limit) if self.limit else 0
        return self.model_copy(update={"items": items, "total": total, "total_pages": total_pages})

    def find(self, item_id: str) -> Optional[T]:
        for item in self.items:
            if getattr(item, "id", None) == item_id:
                return item
        return None


class ApiResponse(BaseModel):
    """Normalised envelope returned by ``ApiClient.request``."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    success: bool
    status_code: int = 0
    data: Any = None
    message: Optional[str] = None
    error: Any = None


class CountByKey(ApiModel):
    type: Optional[str] = None
    status: Optional[str] = None
    priority: Optional[str] = None
    count: int = 0
