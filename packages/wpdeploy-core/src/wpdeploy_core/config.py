"""Validator configuration model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ValidatorConfig(BaseModel):
    """Configuration for parameter validation.

    Attributes:
        fail_fast: Stop at the first violation instead of collecting all of them
        check_resource_group: Validate resource_group_name when one is supplied

    Example:
        >>> config = ValidatorConfig(fail_fast=True)
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    fail_fast: bool = Field(default=False, description="Stop on first violation")
    check_resource_group: bool = Field(
        default=True, description="Validate a supplied resource group name"
    )
