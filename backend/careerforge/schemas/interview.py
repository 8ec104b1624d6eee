from __future__ import annotations

from pydantic import Field

from careerforge.schemas.base import CamelModel


class InterviewGenerateRequest(CamelModel):
    resume_content: str
    job_description: str


class InterviewQuestion(CamelModel):
    question: str
    context: str


class InterviewQuestionsOut(CamelModel):
    questions: list[InterviewQuestion]


class InterviewEvaluateRequest(CamelModel):
    question: str
    answer: str
    context: str


class InterviewEvaluationOut(CamelModel):
    feedback: str
    score: float = Field(ge=0, le=10)
    improved_answer: str
