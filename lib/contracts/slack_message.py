"""Slack message models returned by the surprise service.

The records follow Slack's legacy ``attachments`` layout.  Every record keeps
a fixed set of known optional fields and an ordered bag of properties it does
not recognise.  Unknown properties are carried through untouched so that a
payload survives a load/dump cycle without losing data.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, field_validator


def _dump(value: Any) -> Any:
    if isinstance(value, _OpenRecord):
        return value.to_payload()
    if isinstance(value, list):
        return [_dump(v) for v in value]
    return value


class _OpenRecord(BaseModel):
    """Known fields in declaration order plus an open extras bag."""

    # values are carried, not checked; numbers are accepted for strings
    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    @property
    def additional_properties(self) -> Dict[str, Any]:
        if self.__pydantic_extra__ is None:
            self.__pydantic_extra__ = {}
        return self.__pydantic_extra__

    def set_additional_property(self, name: str, value: Any) -> None:
        if name in type(self).model_fields:
            setattr(self, name, value)
        else:
            self.additional_properties[name] = value

    def to_payload(self) -> Dict[str, Any]:
        """Return the wire mapping.

        Known fields are emitted in declaration order and skipped when
        ``None``; additional properties follow in insertion order.
        """

        payload: Dict[str, Any] = {}
        for name in type(self).model_fields:
            value = getattr(self, name)
            if value is None:
                continue
            payload[name] = _dump(value)
        for name, value in self.additional_properties.items():
            payload[name] = value
        return payload

    def to_json(self) -> str:
        return json.dumps(self.to_payload(), ensure_ascii=False)

    @classmethod
    def from_payload(cls, data: Dict[str, Any]):
        return cls.model_validate(data)

    @classmethod
    def from_json(cls, raw: str):
        return cls.from_payload(json.loads(raw))


class AttachmentField(_OpenRecord):
    """One ``title``/``value`` pair rendered inside an attachment."""

    title: Optional[str] = None
    value: Optional[str] = None
    short: Optional[bool] = None


class Attachment(_OpenRecord):
    """A single formatted block of a Slack message."""

    fallback: Optional[str] = None
    color: Optional[str] = None
    pretext: Optional[str] = None
    author_name: Optional[str] = None
    author_link: Optional[str] = None
    author_icon: Optional[str] = None
    title: Optional[str] = None
    title_link: Optional[str] = None
    text: Optional[str] = None
    fields: Optional[List[AttachmentField]] = None
    image_url: Optional[str] = None
    thumb_url: Optional[str] = None
    footer: Optional[str] = None
    footer_icon: Optional[str] = None
    ts: Optional[int] = None

    @field_validator("ts", mode="before")
    @classmethod
    def truncate_ts(cls, value: Any) -> Any:
        if isinstance(value, float):
            return int(value)
        return value


class SlackResponse(_OpenRecord):
    """Top level reply to a slash command."""

    response_type: Optional[str] = None
    text: Optional[str] = None
    attachments: Optional[List[Attachment]] = None


__all__ = ["Attachment", "AttachmentField", "SlackResponse"]
