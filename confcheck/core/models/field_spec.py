"""
FieldSpec model: a configuration key paired with its ordered rules.
"""

from pydantic import BaseModel, Field, field_validator

from .validation_rule import Rule, expand_rules


class FieldSpec(BaseModel):
    """
    Rules attached to one configuration field.

    Attributes:
        name: Configuration key ("topology.workers")
        rules: Rules evaluated in declared order
        secret: Never echo the field's value in failure messages (passwords)
    """

    name: str = Field(..., min_length=1)
    rules: tuple[Rule, ...] = ()
    secret: bool = False

    expand_field_rules = field_validator("rules", mode="before")(expand_rules)

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "name": "topology.workers",
                "rules": [
                    {"kind": "IsInteger"},
                    {"kind": "IsPositiveNumber", "params": {"include_zero": False}},
                ],
                "secret": False,
            }
        }
