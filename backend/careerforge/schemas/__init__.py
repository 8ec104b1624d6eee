from careerforge.schemas.auth import AuthUserOut
from careerforge.schemas.cover_letter import (
    CoverLetterGenerateRequest,
    CoverLetterOut,
    CoverLetterUpdate,
    InsertCoverLetter,
)
from careerforge.schemas.errors import InternalErrorOut, MessageOut, ValidationErrorOut
from careerforge.schemas.interview import (
    InterviewEvaluateRequest,
    InterviewEvaluationOut,
    InterviewGenerateRequest,
    InterviewQuestion,
    InterviewQuestionsOut,
)
from careerforge.schemas.job import JobFetchRequest, JobPostingOut
from careerforge.schemas.linkedin import LinkedInOptimizeRequest, LinkedInProfileOut
from careerforge.schemas.payment import (
    EmptyRequest,
    PaymentResultOut,
    PayPalCaptureRequest,
    PayPalOrderOut,
    StripeIntentOut,
    StripeVerifyRequest,
)
from careerforge.schemas.resume import (
    Certification,
    Education,
    GeneratedContent,
    InsertResume,
    ResumeGenerateRequest,
    ResumeOptimizeRequest,
    ResumeOptimizeResponse,
    ResumeOut,
    ResumeUpdate,
    WorkExperience,
)

__all__ = [
    "AuthUserOut",
    "InsertResume",
    "ResumeUpdate",
    "ResumeOut",
    "WorkExperience",
    "Education",
    "Certification",
    "ResumeGenerateRequest",
    "GeneratedContent",
    "ResumeOptimizeRequest",
    "ResumeOptimizeResponse",
    "InsertCoverLetter",
    "CoverLetterUpdate",
    "CoverLetterOut",
    "CoverLetterGenerateRequest",
    "JobFetchRequest",
    "JobPostingOut",
    "InterviewGenerateRequest",
    "InterviewQuestion",
    "InterviewQuestionsOut",
    "InterviewEvaluateRequest",
    "InterviewEvaluationOut",
    "LinkedInOptimizeRequest",
    "LinkedInProfileOut",
    "EmptyRequest",
    "StripeIntentOut",
    "StripeVerifyRequest",
    "PaymentResultOut",
    "PayPalOrderOut",
    "PayPalCaptureRequest",
    "MessageOut",
    "ValidationErrorOut",
    "InternalErrorOut",
]
