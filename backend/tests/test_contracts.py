import pytest
from pydantic import ValidationError

from careerforge.contracts import CONTRACT_VERSION, REGISTRY, build_url, export_json_schema, get_contract
from careerforge.schemas import InsertResume, ResumeOut


def test_build_url_substitutes_named_placeholders():
    assert build_url("/api/resumes/:id", {"id": 42}) == "/api/resumes/42"


def test_build_url_leaves_missing_placeholder_untouched():
    assert build_url("/api/resumes/:id", {"other": 1}) == "/api/resumes/:id"
    assert build_url("/api/resumes/:id") == "/api/resumes/:id"


def test_build_url_does_not_touch_longer_placeholder_names():
    assert build_url("/api/:id/:idx", {"id": 1}) == "/api/1/:idx"


def test_route_path_uses_router_syntax():
    assert get_contract("coverLetters.update").route_path == "/api/cover-letters/{id}"
    assert get_contract("resumes.list").route_path == "/api/resumes"


def test_registry_covers_every_operation():
    expected = {
        "resumes.list",
        "resumes.get",
        "resumes.create",
        "resumes.update",
        "resumes.delete",
        "resumes.generate",
        "resumes.optimize",
        "coverLetters.list",
        "coverLetters.get",
        "coverLetters.create",
        "coverLetters.update",
        "coverLetters.delete",
        "coverLetters.generate",
        "jobs.fetch",
        "interview.generateQuestions",
        "interview.evaluateAnswer",
        "linkedin.optimizeProfile",
        "payments.createStripeIntent",
        "payments.verifyStripePayment",
        "payments.createPaypalOrder",
        "payments.capturePaypalOrder",
    }
    assert expected <= set(REGISTRY)
    assert all(401 in entry.responses for entry in REGISTRY.values())


def test_registry_cannot_be_mutated():
    with pytest.raises(TypeError):
        REGISTRY["resumes.list"] = get_contract("resumes.get")  # type: ignore[index]
    with pytest.raises(AttributeError):
        get_contract("resumes.list").path = "/elsewhere"  # type: ignore[misc]


def test_unknown_contract_name_raises():
    with pytest.raises(KeyError):
        get_contract("resumes.archive")


def test_parse_input_ignores_owner_and_rejects_bad_types():
    entry = get_contract("resumes.create")
    parsed = entry.parse_input({"title": "My Resume", "content": "<p>Hi</p>", "userId": "someone-else"})
    assert isinstance(parsed, InsertResume)
    assert not hasattr(parsed, "user_id")

    with pytest.raises(ValidationError):
        entry.parse_input({"title": 5, "content": "x"})


def test_parse_response_by_status():
    entry = get_contract("resumes.get")
    body = {
        "id": 1,
        "userId": "user-alice",
        "title": "T",
        "content": "<p>C</p>",
        "createdAt": "2024-01-01T00:00:00",
        "updatedAt": "2024-01-01T00:00:00",
    }
    assert isinstance(entry.parse_response(200, body), ResumeOut)
    assert entry.parse_response(404, {"message": "Resume not found"}).message == "Resume not found"
    assert get_contract("resumes.delete").parse_response(204, None) is None


def test_exported_schema_is_versioned_and_uses_wire_names():
    exported = export_json_schema()
    assert exported["version"] == CONTRACT_VERSION

    capture = exported["operations"]["payments.capturePaypalOrder"]
    assert capture["method"] == "POST"
    assert capture["path"] == "/api/payments/paypal/capture-order"
    assert "orderID" in capture["input"]["properties"]

    generate = exported["operations"]["resumes.generate"]
    assert "workExperience" in generate["input"]["properties"]
    assert exported["operations"]["resumes.delete"]["responses"]["204"] is None


def test_server_routes_use_contract_request_models(app):
    schema = app.openapi()
    for entry in REGISTRY.values():
        operation = schema["paths"][entry.route_path][entry.method.lower()]
        if entry.input is None:
            assert "requestBody" not in operation
            continue
        body_schema = operation["requestBody"]["content"]["application/json"]["schema"]
        refs = [body_schema.get("$ref", "")] + [item.get("$ref", "") for item in body_schema.get("anyOf", [])]
        assert any(ref.endswith(f"/{entry.input.__name__}") for ref in refs), entry.name
