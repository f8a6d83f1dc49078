from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from backend.app.services.spam import spamfree


class ThreadUpdate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(min_length=1)
    body: str = Field(min_length=1)

    @field_validator("title", "body")
    @classmethod
    def _spamfree(cls, value: str, info: ValidationInfo) -> str:
        return spamfree(value, info.field_name)


class ThreadCreate(ThreadUpdate):
    model_config = ConfigDict(populate_by_name=True)

    channel_id: str = Field(min_length=1)
    recaptcha: str = Field(alias="g-recaptcha-response", min_length=1)


class ThreadResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    body: str
    channel_id: str
    channel_slug: str
    user_id: str
    creator_name: str
    pinned: bool
    visits_count: int
    path: str
    created_at: str
    updated_at: str


class TrendingResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    path: str


class ThreadPage(BaseModel):
    data: list[ThreadResponse]
    current_page: int
    per_page: int
    total: int
    last_page: int
    trending: list[TrendingResponse] = []
