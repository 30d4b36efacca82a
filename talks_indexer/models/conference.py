"""Conference model."""

from pydantic import BaseModel, ConfigDict


class Conference(BaseModel):
    """A conference as listed by the talk source."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str = ""
    slug: str = ""
