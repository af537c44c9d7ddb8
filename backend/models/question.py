from pydantic import BaseModel, ConfigDict, Field, model_validator

OPTIONS_PER_QUESTION = 4


class PublicQuestion(BaseModel):
    """What clients see: the answer key is not a field, so it cannot leak."""
    id: int
    prompt: str
    options: list[str]


class QuizQuestion(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    prompt: str
    options: tuple[str, ...] = Field(min_length=OPTIONS_PER_QUESTION, max_length=OPTIONS_PER_QUESTION)
    correct_option_index: int

    @model_validator(mode="after")
    def _answer_in_range(self) -> "QuizQuestion":
        if not 0 <= self.correct_option_index < len(self.options):
            raise ValueError(
                f"correct_option_index {self.correct_option_index} out of range for question {self.id}"
            )
        return self

    def redacted(self) -> PublicQuestion:
        return PublicQuestion(id=self.id, prompt=self.prompt, options=list(self.options))
