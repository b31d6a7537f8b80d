# backend/lifeos/schemas/base.py
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """
    Base for every request/response body.
    camelCase on the wire (completedDuration, startedAt ...), snake_case in Python.
    Both spellings are accepted on input.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        str_strip_whitespace=True,
    )


# -------------------------
# blank-string helpers
# -------------------------
def strip_and_reject_blank(v, field_name: str):
    """
    Strip surrounding whitespace; an empty result raises ValueError (-> 422).
    """
    if v is None or not isinstance(v, str):
        return v
    stripped = v.strip()
    if stripped == "":
        raise ValueError(f"{field_name} must not be blank")
    return stripped


def strip_to_none(v):
    """
    Optional[str] input: "   " -> None, otherwise the stripped string.
    """
    if v is None or not isinstance(v, str):
        return v
    s = v.strip()
    return s or None
