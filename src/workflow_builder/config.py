"""Export defaults.

The builder reads no config files or environment variables; these defaults can
only be overridden from the command line.
"""

from pydantic import BaseModel, ConfigDict, Field


class BuilderSettings(BaseModel):
    """Defaults applied to every exported workflow."""

    model_config = ConfigDict(frozen=True)

    model: str = Field(default="gpt-4", min_length=1, description="LLM model for agent nodes")
    temperature: float = Field(default=0.3, ge=0.0, le=2.0, description="Sampling temperature")
    agent_class: str = Field(default="AssistantAgent", description="Class name emitted for agents")
    orchestration_type: str = Field(default="Sequential", description="Orchestration strategy")
    schema_version: str = Field(default="2.0", description="Export schema version")
