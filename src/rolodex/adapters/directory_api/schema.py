"""Wire schema of the remote directory service."""

from __future__ import annotations

import logging
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

from rolodex.domain.model import IdentifierKind  # noqa: TC001

log = logging.getLogger(__name__)


class DirectoryBaseModel(BaseModel):
    model_config = ConfigDict(extra="allow", frozen=True)
    _logged_extra_keys: ClassVar[set[str]] = set()

    def model_post_init(self, _context: object, /) -> None:
        extras = self.__pydantic_extra__
        if not extras:
            return
        new_keys = set(extras).difference(self._logged_extra_keys)
        if not new_keys:
            return
        self._logged_extra_keys.update(new_keys)
        log.warning(
            "Directory %s: unmodeled keys: %s",
            type(self).__name__,
            ", ".join(sorted(new_keys)),
        )


class KeyPayload(DirectoryBaseModel):
    kind: IdentifierKind
    value: str = Field(min_length=1)


class LookupRequest(DirectoryBaseModel):
    keys: list[KeyPayload]


class MatchPayload(KeyPayload):
    account_id: str = Field(min_length=1)
    canonical: str | None = None


class LookupResponse(DirectoryBaseModel):
    matches: list[MatchPayload] = Field(default_factory=list)
