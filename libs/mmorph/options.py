"""Configuration records and result records for morph and metric operations."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from mmcore.errors import IndexOutOfRange, ParameterMismatch, UndefinedParameter


class IntervalForm(str, Enum):
    """The six ways a sequence can be split into interval pairs."""
    ADJACENCY = "adjacency interval"
    FUNDAMENTAL_INDEX = "fundamental index"
    FUNDAMENTAL_VALUE = "fundamental value"
    MEAN_FUNDAMENTAL_VALUE = "mean fundamental value"
    MAX_FUNDAMENTAL_VALUE = "max fundamental value"
    COMBINATORIAL = "combinatorial interval"


class ScalingMode(str, Enum):
    """How per-operand deltas are normalized before comparison."""
    NONE = "none"
    ABSOLUTE = "absolute"
    RELATIVE = "relative"


class IntervalOptions(BaseModel):
    """Interval generation settings.

    Only the fields relevant to ``form`` are read: ``adjacency_interval`` for
    the adjacency form, ``fundamental_index`` and ``fundamental_value`` for
    the two fixed-reference forms.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    form: IntervalForm = Field(default=IntervalForm.ADJACENCY, description="Interval form")
    adjacency_interval: int = Field(default=1, description="Index offset k for adjacency pairs")
    fundamental_value: Optional[float] = Field(
        default=None, description="Fixed reference value (fundamental value form)"
    )
    fundamental_index: Optional[int] = Field(
        default=None, description="Reference index (fundamental index form)"
    )

    @classmethod
    def coerce(
        cls,
        options: Union["IntervalOptions", Mapping[str, Any], None] = None,
        **fields: Any,
    ) -> "IntervalOptions":
        """Build options from a record, a mapping and/or keyword overrides."""
        if options is None:
            return cls.model_validate(fields)
        if isinstance(options, IntervalOptions):
            if not fields:
                return options
            return cls.model_validate({**options.model_dump(), **fields})
        return cls.model_validate({**dict(options), **fields})

    def check(self, length: int) -> None:
        """Validate the fields the chosen form needs against a sequence length."""
        if self.form is IntervalForm.ADJACENCY:
            if self.adjacency_interval < 1:
                raise ParameterMismatch(
                    f"adjacency_interval must be at least 1, got {self.adjacency_interval}"
                )
            if self.adjacency_interval >= length:
                raise ParameterMismatch(
                    f"adjacency_interval {self.adjacency_interval} leaves no pairs for length {length}"
                )
        elif self.form is IntervalForm.FUNDAMENTAL_INDEX:
            if self.fundamental_index is None:
                raise UndefinedParameter("fundamental_index is required for the fundamental index form")
            if not 0 <= self.fundamental_index < length:
                raise IndexOutOfRange(
                    f"fundamental_index {self.fundamental_index} out of range for length {length}"
                )
        elif self.form is IntervalForm.FUNDAMENTAL_VALUE:
            if self.fundamental_value is None:
                raise UndefinedParameter("fundamental_value is required for the fundamental value form")


@dataclass(frozen=True)
class GrainedValue:
    """Verbose contour-metric result."""

    value: float  # normalized mismatch, 0.0-1.0
    grain: float  # reciprocal of the largest possible mismatch count


__all__ = ["IntervalForm", "ScalingMode", "IntervalOptions", "GrainedValue"]
