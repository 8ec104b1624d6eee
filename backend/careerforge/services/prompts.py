from __future__ import annotations

from jinja2 import Template

from careerforge.schemas import (
    CoverLetterGenerateRequest,
    InterviewEvaluateRequest,
    InterviewGenerateRequest,
    LinkedInOptimizeRequest,
    ResumeGenerateRequest,
    ResumeOptimizeRequest,
)


RESUME_TEMPLATE = Template(
    """
Generate a professional resume for:
Name: {{ r.full_name }}
Email: {{ r.email }}
Phone: {{ r.phone }}
Address: {{ r.address }}
Job Title: {{ r.job_title }}
Skills: {{ r.skills }}
{% if r.hobbies %}Hobbies: {{ r.hobbies }}
{% endif %}
Work Experience:
{% for job in r.work_experience %}- {{ job.role }} at {{ job.company }} ({{ job.start }} - {{ job.end }}): {{ job.description }}
{% else %}- None provided
{% endfor %}
Education:
{% for item in r.education %}- {{ item.degree }}, {{ item.school }} ({{ item.start }} - {{ item.end }})
{% else %}- None provided
{% endfor %}
{% if r.certifications %}Certifications:
{% for cert in r.certifications %}- {{ cert.name }}, {{ cert.issuer }} ({{ cert.date }})
{% endfor %}
{% endif %}{% if r.target_job_description %}Target Job Description: {{ r.target_job_description }}

{% endif %}Format the output in clean HTML suitable for a rich text editor. Include standard resume sections: Summary, Experience, Education, Skills. Make it professional and achievement-oriented. Do not include markdown code block backticks.
    """.strip()
)

COVER_LETTER_TEMPLATE = Template(
    """
Generate a professional cover letter for the following context:
Company Name: {{ r.company_name }}
Target Job Role: {{ r.job_role }}
My Skills: {{ r.skills }}
My Experience Summary: {{ r.experience_summary }}

Format the output in clean HTML suitable for a rich text editor. Make the tone professional, engaging, and directly connecting my skills to the target role. Do not include markdown code block backticks.
    """.strip()
)

OPTIMIZE_TEMPLATE = Template(
    """
Analyze this resume against the target job description and provide optimization suggestions.

Target Job Description:
{{ r.target_job_description }}

Current Resume:
{{ r.existing_resume }}

Provide your response in JSON format exactly like this:
{
  "analysis": "A brief analysis of the match (e.g., 85% match. Good technical skills, missing soft skills.)",
  "suggestions": "A bulleted list in HTML of actionable suggestions to improve the resume."
}
    """.strip()
)

JOB_POSTING_TEMPLATE = Template(
    """
Extract the job posting details from the text of this web page.

Source URL: {{ url }}

Page Text:
{{ page_text }}

Provide your response in JSON format exactly like this:
{
  "jobTitle": "The job title",
  "companyName": "The hiring company",
  "requirements": "The key requirements and qualifications as plain text",
  "description": "A concise summary of the role and responsibilities"
}
Use an empty string for any field the page does not mention.
    """.strip()
)

LINKEDIN_TEMPLATE = Template(
    """
You are a LinkedIn branding expert. Rewrite this person's LinkedIn profile so that it attracts recruiters.

{% if r.profile_or_resume_content %}Profile or Resume Content:
{{ r.profile_or_resume_content }}

{% endif %}{% if r.linkedin_url %}Current LinkedIn URL: {{ r.linkedin_url }}

{% endif %}Provide your response in JSON format exactly like this:
{
  "headline": "A keyword-rich headline under 220 characters",
  "summary": "An engaging About section written in the first person",
  "experienceSuggestions": ["Specific suggestion for improving an experience entry"]
}
    """.strip()
)

INTERVIEW_QUESTIONS_TEMPLATE = Template(
    """
You are an experienced hiring manager. Prepare {{ count }} interview questions for this candidate and role.

Job Description:
{{ r.job_description }}

Candidate Resume:
{{ r.resume_content }}

Mix behavioral, technical and role-specific questions. Provide your response in JSON format exactly like this:
{
  "questions": [
    {"question": "The interview question", "context": "What the interviewer is looking for"}
  ]
}
    """.strip()
)

INTERVIEW_EVALUATION_TEMPLATE = Template(
    """
You are an interview coach. Evaluate the candidate's answer.

Question: {{ r.question }}
Interviewer Focus: {{ r.context }}
Candidate Answer: {{ r.answer }}

Provide your response in JSON format exactly like this:
{
  "feedback": "Constructive feedback on the answer",
  "score": 7,
  "improvedAnswer": "A stronger version of the answer"
}
The score is a number from 0 to 10.
    """.strip()
)


def resume_prompt(request: ResumeGenerateRequest) -> str:
    return RESUME_TEMPLATE.render(r=request)


def cover_letter_prompt(request: CoverLetterGenerateRequest) -> str:
    return COVER_LETTER_TEMPLATE.render(r=request)


def optimize_prompt(request: ResumeOptimizeRequest) -> str:
    return OPTIMIZE_TEMPLATE.render(r=request)


def job_posting_prompt(url: str, page_text: str) -> str:
    return JOB_POSTING_TEMPLATE.render(url=url, page_text=page_text)


def linkedin_prompt(request: LinkedInOptimizeRequest) -> str:
    return LINKEDIN_TEMPLATE.render(r=request)


def interview_questions_prompt(request: InterviewGenerateRequest, count: int = 5) -> str:
    return INTERVIEW_QUESTIONS_TEMPLATE.render(r=request, count=count)


def interview_evaluation_prompt(request: InterviewEvaluateRequest) -> str:
    return INTERVIEW_EVALUATION_TEMPLATE.render(r=request)
