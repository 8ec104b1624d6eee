import pytest
from openai import OpenAIError

from careerforge.config import Settings
from careerforge.contracts import get_contract
from careerforge.main import create_app
from careerforge.providers import Providers
from fastapi.testclient import TestClient

from conftest import USERS, FakeIdentityProvider


OPTIMIZE_BODY = {"existingResume": "<p>Resume</p>", "targetJobDescription": "Python developer"}
QUESTIONS_BODY = {"resumeContent": "<p>Resume</p>", "jobDescription": "Python developer"}
EVALUATE_BODY = {"question": "Why us?", "answer": "Because.", "context": "Motivation"}
LINKEDIN_BODY = {"profileOrResumeContent": "Backend engineer with 5 years of Python"}

JSON_ENDPOINTS = [
    ("resumes.optimize", OPTIMIZE_BODY),
    ("interview.generateQuestions", QUESTIONS_BODY),
    ("interview.evaluateAnswer", EVALUATE_BODY),
    ("linkedin.optimizeProfile", LINKEDIN_BODY),
]


def test_generate_resume_returns_html(client, chat, alice):
    chat.queue("```html\n<h1>Ada</h1>\n```")
    body = {
        "fullName": "Ada",
        "email": "ada@example.com",
        "phone": "1",
        "address": "London",
        "jobTitle": "Engineer",
        "skills": "Python",
        "workExperience": [],
        "education": [],
    }

    response = client.post("/api/resumes/generate", json=body, headers=alice)
    assert response.status_code == 200
    assert response.json() == {"content": "<h1>Ada</h1>"}


def test_generate_resume_reports_nested_field(client, alice):
    body = {
        "fullName": "Ada",
        "email": "ada@example.com",
        "phone": "1",
        "address": "London",
        "jobTitle": "Engineer",
        "skills": "Python",
        "workExperience": [{"role": "Dev", "start": "2020", "end": "2021", "description": "x"}],
        "education": [],
    }

    response = client.post("/api/resumes/generate", json=body, headers=alice)
    assert response.status_code == 400
    assert response.json()["field"] == "workExperience.0.company"


def test_cover_letter_generation(client, chat, alice):
    chat.queue("<p>Dear Acme</p>")
    body = {"companyName": "Acme", "jobRole": "Dev", "skills": "Python", "experienceSummary": "5 years"}

    response = client.post("/api/cover-letters/generate", json=body, headers=alice)
    assert response.json() == {"content": "<p>Dear Acme</p>"}
    assert "Company Name: Acme" in chat.calls[0][0]


def test_well_formed_json_is_passed_through(client, chat, alice):
    chat.queue('{"feedback": "Solid", "score": 8, "improvedAnswer": "Even better"}')

    response = client.post("/api/interview/evaluate", json=EVALUATE_BODY, headers=alice)
    assert response.status_code == 200
    assert response.json() == {"feedback": "Solid", "score": 8, "improvedAnswer": "Even better"}


@pytest.mark.parametrize("name,body", JSON_ENDPOINTS)
def test_malformed_model_output_degrades_to_fallback(client, chat, alice, name, body):
    chat.queue("I'm sorry, I can't produce JSON today.")
    contract = get_contract(name)

    response = client.post(contract.path, json=body, headers=alice)
    assert response.status_code == 200
    contract.parse_response(200, response.json())


def test_evaluation_fallback_is_neutral(client, chat, alice):
    chat.queue("{not json")
    body = client.post("/api/interview/evaluate", json=EVALUATE_BODY, headers=alice).json()
    assert body["score"] == 5
    assert body["feedback"]


def test_questions_fallback_has_questions(client, chat, alice):
    chat.queue('{"questions": "nope"}')
    body = client.post("/api/interview/generate", json=QUESTIONS_BODY, headers=alice).json()
    assert len(body["questions"]) == 3
    assert all(item["question"] and item["context"] for item in body["questions"])


@pytest.mark.parametrize("name,body", JSON_ENDPOINTS)
def test_provider_failure_is_server_error(client, chat, alice, name, body):
    chat.queue(OpenAIError("upstream down"))

    response = client.post(get_contract(name).path, json=body, headers=alice)
    assert response.status_code == 500
    payload = response.json()
    assert payload["message"].startswith("Failed to")
    assert "upstream down" in payload["detail"]


def test_linkedin_requires_some_input(client, chat, alice):
    response = client.post("/api/linkedin/optimize", json={"profileOrResumeContent": "   "}, headers=alice)
    assert response.status_code == 400
    assert response.json()["message"]
    assert chat.calls == []


def test_linkedin_accepts_url_only(client, chat, alice):
    chat.queue('{"headline": "Engineer", "summary": "I build things", "experienceSuggestions": ["Add metrics"]}')

    response = client.post("/api/linkedin/optimize", json={"linkedinUrl": "https://linkedin.com/in/ada"}, headers=alice)
    assert response.status_code == 200
    assert response.json()["experienceSuggestions"] == ["Add metrics"]
    assert "https://linkedin.com/in/ada" in chat.calls[0][0]


def test_generation_requires_auth(client, chat):
    response = client.post("/api/interview/evaluate", json=EVALUATE_BODY)
    assert response.status_code == 401
    assert chat.calls == []


def test_missing_ai_provider_is_server_error():
    app = create_app(
        Settings(database_url="sqlite://", log_level="WARNING"),
        providers=Providers(identity=FakeIdentityProvider(USERS)),
    )
    client = TestClient(app)

    response = client.post("/api/interview/evaluate", json=EVALUATE_BODY, headers={"Authorization": "Bearer alice-token"})
    assert response.status_code == 500
    assert response.json() == {"message": "AI provider is not configured"}


def test_unexpected_failure_is_internal_error(client, chat, alice):
    chat.queue(RuntimeError("boom"))

    response = client.post("/api/interview/evaluate", json=EVALUATE_BODY, headers=alice)
    assert response.status_code == 500
    assert response.json() == {"message": "Internal Server Error", "detail": "boom"}
