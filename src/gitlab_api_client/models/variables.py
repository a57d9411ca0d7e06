"""
Pydantic models for instance level CI/CD variables.

GitLab API docs: https://docs.gitlab.com/api/instance_level_ci_variables/
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class VariableType(str, Enum):
    """Valid variable_type values."""
    ENV_VAR = "env_var"
    FILE = "file"


class InstanceVariable(BaseModel):
    """A GitLab instance level CI variable."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    key: str = Field(description="Variable key, unique within the instance")
    value: str = Field(default="", repr=False, description="Variable value")
    variable_type: VariableType = Field(default=VariableType.ENV_VAR, description="Variable type")
    protected: bool = Field(default=False, description="Only exposed to protected branches and tags")
    masked: bool = Field(default=False, description="Masked in job logs")
    raw: bool = Field(default=False, description="Value is not expanded")
    description: Optional[str] = Field(default=None, description="Free-text description")


class ListInstanceVariablesOptions(BaseModel):
    """Query parameters accepted when listing instance variables."""

    page: Optional[int] = Field(default=None, ge=1, description="Page number (1-based)")
    per_page: Optional[int] = Field(default=None, ge=1, le=100, description="Items per page")


class CreateInstanceVariableOptions(BaseModel):
    """
    Request body for creating an instance variable.

    Only key and value are required; omitted fields take GitLab's defaults.
    """

    model_config = ConfigDict(extra="forbid")

    key: str = Field(..., min_length=1, description="Variable key")
    value: str = Field(..., repr=False, description="Variable value")
    description: Optional[str] = None
    masked: Optional[bool] = None
    protected: Optional[bool] = None
    raw: Optional[bool] = None
    variable_type: Optional[VariableType] = None


class UpdateInstanceVariableOptions(BaseModel):
    """
    Request body for updating an instance variable.

    The key addresses the variable and cannot be changed, so it is not a field here.
    """

    model_config = ConfigDict(extra="forbid")

    value: Optional[str] = Field(default=None, repr=False)
    description: Optional[str] = None
    masked: Optional[bool] = None
    protected: Optional[bool] = None
    raw: Optional[bool] = None
    variable_type: Optional[VariableType] = None
