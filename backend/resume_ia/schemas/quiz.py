from pydantic import BaseModel, Field, field_validator, model_validator


class QuizOption(BaseModel):
    id: str = Field(min_length=1, description="Identifiant unique de l'option, par exemple 'q1a'.")
    text: str = Field(min_length=1, description="Texte de l'option de réponse.")


class QuizQuestion(BaseModel):
    id: str = Field(min_length=1, description="Identifiant unique de la question, par exemple 'q1'.")
    question_text: str = Field(min_length=1, description="Texte de la question.")
    options: list[QuizOption] = Field(min_length=3, max_length=4, description="3 ou 4 options de réponse.")
    correct_answer_id: str = Field(description="Identifiant de l'option correcte.")
    explanation: str | None = Field(default=None, description="Brève explication de la bonne réponse.")

    @model_validator(mode="after")
    def check_answer_belongs_to_options(self) -> "QuizQuestion":
        option_ids = [option.id for option in self.options]
        if len(set(option_ids)) != len(option_ids):
            raise ValueError(f"duplicate option ids in question {self.id}")
        if self.correct_answer_id not in option_ids:
            raise ValueError(f"correct_answer_id {self.correct_answer_id!r} is not an option of question {self.id}")
        return self


class QuizData(BaseModel):
    questions: list[QuizQuestion] = Field(min_length=3, max_length=5, description="3 à 5 questions.")

    @field_validator("questions")
    @classmethod
    def unique_question_ids(cls, questions: list[QuizQuestion]) -> list[QuizQuestion]:
        ids = [question.id for question in questions]
        if len(set(ids)) != len(ids):
            raise ValueError("question ids must be unique")
        return questions


class GenerateQuizInput(BaseModel):
    summary_text: str
