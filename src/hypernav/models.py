from typing import Any

from pydantic import BaseModel, ConfigDict, Field

READ_METHOD = "GET"
WRITE_METHOD = "POST"
OUT_METHOD = "OUT"
METHOD_SEPARATOR = "|"
SELF_RELATION = "self"


class LinkDescriptor(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow", frozen=True)

    rel: str
    method: str
    href: str | None = None
    post_data: Any = Field(default=None, alias="postData")

    @property
    def methods(self) -> list[str]:
        """Method tokens in declaration order."""
        return self.method.split(METHOD_SEPARATOR)

    @property
    def is_self(self) -> bool:
        return self.rel == SELF_RELATION
