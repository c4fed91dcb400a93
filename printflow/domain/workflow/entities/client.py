"""Client entity: the customer a job is printed for."""

from pydantic import Field

from ...shared.base import Entity


class Client(Entity):
    """Customer placing print orders; jobs reference it by id."""

    name: str = Field(min_length=1, max_length=200)
    email: str | None = Field(None, max_length=255)

    def is_valid(self) -> bool:
        return bool(self.name)
