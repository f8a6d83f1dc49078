from pydantic import BaseModel, ConfigDict, Field


class ChannelCreate(BaseModel):
    name: str = Field(min_length=1)
    slug: str | None = None


class ChannelUpdate(BaseModel):
    archived: bool


class ChannelResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    slug: str
    archived: bool
    created_at: str
