from __future__ import annotations

import logging
from typing import Protocol, TypeVar

from openai import OpenAI, OpenAIError
from pydantic import BaseModel

from careerforge.errors import GenerationError
from careerforge.schemas import (
    CoverLetterGenerateRequest,
    InterviewEvaluateRequest,
    InterviewEvaluationOut,
    InterviewGenerateRequest,
    InterviewQuestion,
    InterviewQuestionsOut,
    JobPostingOut,
    LinkedInOptimizeRequest,
    LinkedInProfileOut,
    ResumeGenerateRequest,
    ResumeOptimizeRequest,
    ResumeOptimizeResponse,
)
from careerforge.services import prompts
from careerforge.services.json_parsing import ParseResult, parse_json_model, strip_code_fences


logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class ChatClient(Protocol):
    def complete(self, prompt: str, *, json_mode: bool = False) -> str: ...


class OpenAIChatClient:
    """Single-prompt chat completions against an OpenAI-compatible endpoint."""

    def __init__(self, api_key: str, model: str, base_url: str | None = None) -> None:
        self.model = model
        self.client = OpenAI(api_key=api_key, base_url=base_url or None)

    def complete(self, prompt: str, *, json_mode: bool = False) -> str:
        kwargs: dict = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
        }
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}
        logger.debug("LLM call: model=%s json_mode=%s prompt_chars=%d", self.model, json_mode, len(prompt))
        completion = self.client.chat.completions.create(**kwargs)
        return completion.choices[0].message.content or ""


def fallback_optimization() -> ResumeOptimizeResponse:
    return ResumeOptimizeResponse(
        analysis="We could not complete a detailed analysis this time. Please try again in a moment.",
        suggestions=(
            "<ul><li>Mirror the key skills and keywords from the job description.</li>"
            "<li>Quantify achievements with numbers where possible.</li>"
            "<li>Lead each bullet point with a strong action verb.</li></ul>"
        ),
    )


def fallback_evaluation() -> InterviewEvaluationOut:
    return InterviewEvaluationOut(
        feedback="We could not evaluate this answer automatically. Try structuring it with the STAR method "
        "(Situation, Task, Action, Result) and submit again.",
        score=5,
        improved_answer="",
    )


def fallback_questions() -> InterviewQuestionsOut:
    return InterviewQuestionsOut(
        questions=[
            InterviewQuestion(
                question="Tell me about yourself and why you are interested in this role.",
                context="Motivation and a concise summary of relevant experience.",
            ),
            InterviewQuestion(
                question="Describe a challenging project you worked on and how you handled it.",
                context="Problem solving, ownership and measurable outcomes.",
            ),
            InterviewQuestion(
                question="Tell me about a time you disagreed with a teammate. What happened?",
                context="Collaboration and conflict resolution.",
            ),
        ]
    )


def fallback_linkedin() -> LinkedInProfileOut:
    return LinkedInProfileOut(
        headline="",
        summary="We could not generate an optimized profile this time. Please try again in a moment.",
        experience_suggestions=[],
    )


def fallback_job_posting(page_text: str) -> JobPostingOut:
    return JobPostingOut(job_title="", company_name="", requirements="", description=page_text)


class CareerGenerator:
    """Builds prompts from structured input and asks the AI provider for content.

    HTML generators return the fence-stripped text. JSON generators return a
    ``ParseResult`` so the caller decides between a fallback and an error.
    """

    def __init__(self, client: ChatClient, question_count: int = 5) -> None:
        self.client = client
        self.question_count = question_count

    def _complete(self, prompt: str, *, json_mode: bool, failure: str) -> str:
        try:
            return self.client.complete(prompt, json_mode=json_mode)
        except OpenAIError as exc:
            raise GenerationError(failure, detail=str(exc)) from exc

    def _complete_json(self, prompt: str, model: type[T], failure: str) -> ParseResult[T]:
        text = self._complete(prompt, json_mode=True, failure=failure)
        result = parse_json_model(text, model)
        if not result.ok:
            logger.warning("Could not parse %s from model output: %s", model.__name__, result.error)
        return result

    def generate_resume(self, request: ResumeGenerateRequest) -> str:
        text = self._complete(prompts.resume_prompt(request), json_mode=False, failure="Failed to generate resume")
        return strip_code_fences(text)

    def generate_cover_letter(self, request: CoverLetterGenerateRequest) -> str:
        text = self._complete(
            prompts.cover_letter_prompt(request),
            json_mode=False,
            failure="Failed to generate cover letter",
        )
        return strip_code_fences(text)

    def optimize_resume(self, request: ResumeOptimizeRequest) -> ParseResult[ResumeOptimizeResponse]:
        return self._complete_json(
            prompts.optimize_prompt(request),
            ResumeOptimizeResponse,
            failure="Failed to optimize resume",
        )

    def extract_job_posting(self, url: str, page_text: str) -> ParseResult[JobPostingOut]:
        return self._complete_json(
            prompts.job_posting_prompt(url, page_text),
            JobPostingOut,
            failure="Failed to fetch job details",
        )

    def optimize_linkedin(self, request: LinkedInOptimizeRequest) -> ParseResult[LinkedInProfileOut]:
        return self._complete_json(
            prompts.linkedin_prompt(request),
            LinkedInProfileOut,
            failure="Failed to optimize LinkedIn profile",
        )

    def generate_interview_questions(self, request: InterviewGenerateRequest) -> ParseResult[InterviewQuestionsOut]:
        return self._complete_json(
            prompts.interview_questions_prompt(request, count=self.question_count),
            InterviewQuestionsOut,
            failure="Failed to generate questions",
        )

    def evaluate_interview_answer(self, request: InterviewEvaluateRequest) -> ParseResult[InterviewEvaluationOut]:
        return self._complete_json(
            prompts.interview_evaluation_prompt(request),
            InterviewEvaluationOut,
            failure="Failed to evaluate answer",
        )
