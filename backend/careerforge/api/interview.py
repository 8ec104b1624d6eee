from __future__ import annotations

from fastapi import APIRouter, Depends

from careerforge.auth import AuthenticatedUser, get_current_user
from careerforge.contracts import get_contract
from careerforge.providers import get_generator
from careerforge.schemas.interview import (
    InterviewEvaluateRequest,
    InterviewEvaluationOut,
    InterviewGenerateRequest,
    InterviewQuestionsOut,
)
from careerforge.services.generation import CareerGenerator, fallback_evaluation, fallback_questions


router = APIRouter()

GENERATE_QUESTIONS = get_contract("interview.generateQuestions")
EVALUATE_ANSWER = get_contract("interview.evaluateAnswer")


@router.post(GENERATE_QUESTIONS.route_path, response_model=GENERATE_QUESTIONS.responses[200])
def generate_questions(
    payload: InterviewGenerateRequest,
    current_user: AuthenticatedUser = Depends(get_current_user),
    generator: CareerGenerator = Depends(get_generator),
) -> InterviewQuestionsOut:
    return generator.generate_interview_questions(payload).unwrap_or(fallback_questions())


@router.post(EVALUATE_ANSWER.route_path, response_model=EVALUATE_ANSWER.responses[200])
def evaluate_answer(
    payload: InterviewEvaluateRequest,
    current_user: AuthenticatedUser = Depends(get_current_user),
    generator: CareerGenerator = Depends(get_generator),
) -> InterviewEvaluationOut:
    return generator.evaluate_interview_answer(payload).unwrap_or(fallback_evaluation())
