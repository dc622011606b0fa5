"""Configuration schema — validates archcoach.yml."""

from pydantic import BaseModel, field_validator, model_validator

from archcoach.schemas.architecture import Framework


class CoachConfig(BaseModel):
    """Top-level configuration loaded from archcoach.yml.

    Every key is optional; an empty file yields the defaults below.
    """

    # Text-generation settings
    model: str = "gpt-4o"
    analysis_max_tokens: int = 2000  # scenario analysis (structured JSON)
    question_max_tokens: int = 300   # strategy coach answers (plain text)

    # Framework used when the CLI is not given --framework
    framework: Framework = Framework.TOGAF

    # Output
    output_directory: str = "./output"

    @field_validator("framework", mode="before")
    @classmethod
    def parse_framework(cls, v: object) -> object:
        if isinstance(v, str):
            return Framework.parse(v)
        return v

    @model_validator(mode="after")
    def check_token_budgets(self) -> "CoachConfig":
        if self.analysis_max_tokens <= 0 or self.question_max_tokens <= 0:
            raise ValueError("Token budgets must be positive")
        return self

    @model_validator(mode="after")
    def check_model_name(self) -> "CoachConfig":
        if not self.model.strip():
            raise ValueError("'model' must not be empty")
        return self
