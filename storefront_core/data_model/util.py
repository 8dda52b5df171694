import secrets
from datetime import datetime, timezone
from typing import Dict, Any, Optional

from pydantic import BaseModel


def new_id() -> str:
    return secrets.token_hex(12)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def ensure_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Naive datetimes are taken to be UTC so they compare with aware ones."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class PropertyBaseModel(BaseModel):
    """
    Includes properties in the output of dict() and json(),
    unless they are excluded via Config.fields.
    See also:
        https://github.com/samuelcolvin/pydantic/issues/935
    """

    @classmethod
    def get_properties(cls):
        c = cls.Config
        fields = getattr(c, "fields", {})
        return [
            prop
            for prop in dir(cls)
            if isinstance(getattr(cls, prop), property)
            and prop not in ("__values__", "fields")
            and (
                prop not in fields
                or "exclude" not in fields[prop]
                or not fields[prop]["exclude"]
            )
        ]

    def dict(self, *args, **kwargs) -> Dict[str, Any]:
        attribs = super().dict(*args, **kwargs)
        exclude = kwargs.get("exclude") or set()
        props = [prop for prop in self.get_properties() if prop not in exclude]
        if props:
            attribs.update({prop: getattr(self, prop) for prop in props})
        return attribs
