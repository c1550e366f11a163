"""Tunable option definitions."""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
    model_validator,
)

BOOL_VALUES = ("true", "false")


class OptionType(str, Enum):
    """Value domain of a tunable option."""

    BOOL = "bool"
    INT = "int"
    FLOAT = "float"


def is_integral(value: int | float) -> bool:
    """True when ``value`` has no fractional part."""
    return float(value).is_integer()


class ConfigOption(BaseModel):
    """One tunable Ceph option and its legal domain.

    ``min``/``max`` are ignored for boolean options. Values travel as strings
    because ``ceph`` only speaks text.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(min_length=1)
    type: OptionType
    start_value: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("start_value", "startvalue", "startValue"),
    )
    min_value: int | float | None = Field(
        default=None, validation_alias=AliasChoices("min", "min_value")
    )
    max_value: int | float | None = Field(
        default=None, validation_alias=AliasChoices("max", "max_value")
    )
    description: Optional[str] = None

    @field_validator("type", mode="before")
    @classmethod
    def _normalize_type(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("start_value", mode="before")
    @classmethod
    def _coerce_start_value(cls, value: Any, info: ValidationInfo) -> Optional[str]:
        # YAML turns `startvalue: true` into a bool and `100` into an int
        if value is None:
            return None
        if isinstance(value, bool):
            return "true" if value else "false"
        value = str(value).strip()
        if info.data.get("type") is OptionType.BOOL:
            value = value.lower()
        return value or None

    @model_validator(mode="after")
    def _check_domain(self) -> ConfigOption:
        if self.type is OptionType.BOOL:
            if self.start_value is not None and self.start_value not in BOOL_VALUES:
                raise ValueError(
                    f"Start value {self.start_value!r} of bool option '{self.name}' "
                    f"must be 'true' or 'false'"
                )
            return self

        if self.min_value is None or self.max_value is None:
            raise ValueError(f"Numeric option '{self.name}' needs both 'min' and 'max'")

        if self.type is OptionType.INT and not self.has_integral_bounds:
            raise ValueError(
                f"Int option '{self.name}' needs whole-number bounds, "
                f"got [{self.min_value}, {self.max_value}]"
            )

        if self.has_integral_bounds:
            if self.max_value <= self.min_value:
                raise ValueError(
                    f"Option '{self.name}' has an empty integer range "
                    f"[{self.min_value}, {self.max_value})"
                )
        elif self.max_value < self.min_value:
            raise ValueError(
                f"Option '{self.name}' has max {self.max_value} below min {self.min_value}"
            )

        if self.start_value is not None:
            try:
                start = float(self.start_value)
            except ValueError:
                raise ValueError(
                    f"Start value {self.start_value!r} of option '{self.name}' "
                    f"is not a number"
                ) from None
            if self.type is OptionType.INT and not is_integral(start):
                raise ValueError(
                    f"Start value {self.start_value!r} of int option '{self.name}' "
                    f"is not a whole number"
                )
        return self

    @property
    def is_bool(self) -> bool:
        return self.type is OptionType.BOOL

    @property
    def has_integral_bounds(self) -> bool:
        """Both bounds are whole numbers, so candidates are drawn as integers."""
        if self.min_value is None or self.max_value is None:
            return False
        return is_integral(self.min_value) and is_integral(self.max_value)

    def describe_domain(self) -> str:
        """Human readable domain, used in summaries."""
        if self.is_bool:
            return "true | false"
        if self.has_integral_bounds:
            return f"[{int(self.min_value)}, {int(self.max_value)})"
        return f"[{self.min_value}, {self.max_value}]"
