# src/form_auditor/expectations.py
import re
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

TAG_NAME = re.compile(r"^[A-Za-z][A-Za-z0-9-]*$")


def _selector_safe(value: str) -> str:
    """Values end up inside a quoted CSS attribute selector."""
    if any(c in value for c in "\"\\\n"):
        raise ValueError(f"{value!r} may not contain quotes, backslashes or newlines")
    return value


class FieldExpectation(BaseModel):
    """
    Expected shape of one form control (select, textarea, input).
    Optional rules (options, placeholder, attributes) only apply when configured.
    """
    key: str
    tag: str
    id: str
    name: Optional[str] = None
    required: bool = False
    tabindex: Optional[str] = None
    label_accesskey: Optional[str] = None

    # select-only rules
    min_options: Optional[int] = None
    placeholder_first: bool = False
    option_values: List[str] = Field(default_factory=list)

    # e.g. rows/cols on a textarea
    non_empty_attributes: List[str] = Field(default_factory=list)

    @field_validator('tabindex', mode='before')
    @classmethod
    def stringify_tabindex(cls, v: Any) -> Optional[str]:
        """Attribute values are strings in the DOM; accept 6 as well as "6" in settings."""
        return None if v is None else str(v)

    @field_validator('tag')
    @classmethod
    def lower_tag(cls, v: str) -> str:
        if not TAG_NAME.match(v):
            raise ValueError(f"{v!r} is not a valid tag name")
        return v.lower()

    @field_validator('id')
    @classmethod
    def safe_id(cls, v: str) -> str:
        return _selector_safe(v)

    @property
    def selector(self) -> str:
        return f'{self.tag}[id="{self.id}"]'

    @property
    def label_selector(self) -> str:
        return f'label[for="{self.id}"]'

    @property
    def display(self) -> str:
        return f"{self.tag}#{self.id}"


class ButtonExpectation(BaseModel):
    """Expected shape of an action button, located by its type attribute."""
    key: str
    type: str
    accesskey: Optional[str] = None
    tabindex: Optional[str] = None

    @field_validator('tabindex', mode='before')
    @classmethod
    def stringify_tabindex(cls, v: Any) -> Optional[str]:
        return None if v is None else str(v)

    @field_validator('type')
    @classmethod
    def safe_type(cls, v: str) -> str:
        return _selector_safe(v)

    @property
    def selector(self) -> str:
        return f'button[type="{self.type}"]'

    @property
    def display(self) -> str:
        return f'button[type="{self.type}"]'


class FormExpectations(BaseModel):
    """All literal values the checks compare the document against."""
    fields: List[FieldExpectation] = Field(default_factory=list)
    buttons: List[ButtonExpectation] = Field(default_factory=list)
    min_accesskeys: int = 4
    min_tabindexes: int = 4

    @model_validator(mode='after')
    def unique_keys(self):
        keys = [f.key for f in self.fields] + [b.key for b in self.buttons]
        dupes = sorted({k for k in keys if keys.count(k) > 1})
        if dupes:
            raise ValueError(f"Duplicate subject keys in form expectations: {dupes}")
        return self

    @classmethod
    def from_config(cls, config: Optional[Dict[str, Any]]) -> "FormExpectations":
        """Builds expectations from the 'form' section of settings.json."""
        return cls.model_validate(config or {})
