from datetime import datetime
import fitz
from resume_ia.api.deps import get_current_account
from resume_ia.main import app
from resume_ia.models import SavedSummary
from resume_ia.services import tts_service
from resume_ia.schemas.account import AccountOut
from conftest import SAMPLE_QUIZ

LONG_TEXT = (
    "Le cycle de l'eau décrit la circulation de l'eau entre les océans, l'atmosphère et les continents. "
    "Il comprend l'évaporation, la condensation et les précipitations."
)


def _saved_payload(**overrides):
    payload = {
        "title": "Résumé - Texte personnalisé",
        "content": "<h3>Résumé</h3><p>Le cycle de l'eau.</p>",
        "input_type": "text",
        "input_value": LONG_TEXT,
        "output_format": "resume",
        "target_language": "fr",
        "summary_length": "moyen",
    }
    payload.update(overrides)
    return payload


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
    assert response.headers["X-Request-ID"]


def test_generate_text_summary(client):
    response = client.post("/summaries:generate", json={"input_type": "text", "input_value": LONG_TEXT})
    assert response.status_code == 200
    body = response.json()
    assert body["title"].startswith("Résumé - Texte personnalisé")
    assert "Points clés" in body["content"]


def test_generate_rejects_short_text(client):
    response = client.post("/summaries:generate", json={"input_type": "text", "input_value": "court"})
    assert response.status_code == 400
    assert response.json() == {"detail": "Le texte doit contenir au moins 50 caractères."}


def test_generate_rejects_unknown_format(client):
    response = client.post(
        "/summaries:generate", json={"input_type": "text", "input_value": LONG_TEXT, "output_format": "poeme"}
    )
    assert response.status_code == 422


def test_generate_pdf_upload(client):
    doc = fitz.open()
    doc.new_page().insert_text((72, 72), "Les volcans sont des ouvertures de la croute terrestre.")
    data = doc.tobytes()
    doc.close()
    response = client.post(
        "/summaries:generate-pdf",
        files={"file": ("volcans.pdf", data, "application/pdf")},
        data={"output_format": "resume", "target_language": "fr", "summary_length": "court"},
    )
    assert response.status_code == 200
    assert response.json()["title"] == "Résumé - volcans.pdf"


def test_generate_pdf_requires_pdf_extension(client):
    response = client.post("/summaries:generate-pdf", files={"file": ("notes.txt", b"hello", "text/plain")})
    assert response.status_code == 400


def test_quiz_flow_too_short(client):
    response = client.post("/flows/quiz", json={"summary_text": "Texte de vingt car."})
    assert response.status_code == 400
    assert "plus long" in response.json()["detail"]


def test_saved_summary_lifecycle(client):
    existing = client.post("/me/summaries", json=_saved_payload(title="Ancien")).json()["id"]
    before = client.get("/me/summaries").json()

    created = client.post("/me/summaries", json=_saved_payload(quiz_data=SAMPLE_QUIZ))
    assert created.status_code == 201
    summary_id = created.json()["id"]
    assert created.json()["account_id"] == "user-1"

    listed = client.get("/me/summaries").json()
    assert {item["id"] for item in listed} == {summary_id, existing}

    fetched = client.get(f"/me/summaries/{summary_id}").json()
    assert fetched["quiz_data"]["questions"][0]["id"] == "q1"

    exported = client.get(f"/me/summaries/{summary_id}/export")
    assert exported.status_code == 200
    assert "Le cycle de l'eau." in exported.text
    assert "* Paris" in exported.text
    assert 'filename="resume_texte_personnalise_resume_fr.txt"' in exported.headers["content-disposition"]

    deleted = client.delete(f"/me/summaries/{summary_id}")
    assert deleted.status_code == 200
    assert client.get("/me/summaries").json() == before
    assert client.get(f"/me/summaries/{summary_id}").status_code == 404


def test_summaries_are_scoped_to_account(client):
    summary_id = client.post("/me/summaries", json=_saved_payload()).json()["id"]
    app.dependency_overrides[get_current_account] = lambda: AccountOut(account_id="user-2")
    assert client.get("/me/summaries").json() == []
    response = client.delete(f"/me/summaries/{summary_id}")
    assert response.status_code == 404
    assert response.json()["detail"] == "Résumé introuvable."


def test_summaries_newest_first(client, db_session):
    first = client.post("/me/summaries", json=_saved_payload(title="Premier")).json()["id"]
    second = client.post("/me/summaries", json=_saved_payload(title="Second")).json()["id"]
    third = client.post("/me/summaries", json=_saved_payload(title="Troisième")).json()["id"]
    stamps = {first: datetime(2024, 1, 1), second: datetime(2024, 3, 1), third: datetime(2024, 2, 1)}
    for summary_id, created_at in stamps.items():
        db_session.get(SavedSummary, summary_id).created_at = created_at
    db_session.commit()

    ids = [item["id"] for item in client.get("/me/summaries").json()]
    assert ids == [second, third, first]


def test_tts_and_audio_download(client, monkeypatch):
    class FakeTTS:
        def __init__(self, text, lang):
            self.text = text
            self.lang = lang

        def save(self, path):
            with open(path, "wb") as handle:
                handle.write(b"ID3fake")

    monkeypatch.setattr(tts_service, "gTTS", FakeTTS)
    summary_id = client.post("/me/summaries", json=_saved_payload()).json()["id"]
    assert client.get(f"/me/summaries/{summary_id}/audio").status_code == 404

    response = client.post(f"/me/summaries/{summary_id}/tts")
    assert response.status_code == 200
    assert response.json()["language"] == "fr"
    again = client.post(f"/me/summaries/{summary_id}/tts")
    assert again.json()["id"] == response.json()["id"]

    audio = client.get(f"/me/summaries/{summary_id}/audio")
    assert audio.status_code == 200
    assert audio.headers["content-type"] == "audio/mpeg"
    assert audio.content == b"ID3fake"


def test_preferences_defaults_and_update(client):
    defaults = client.get("/me/preferences").json()
    assert defaults["default_language"] == "fr"
    assert defaults["default_summary_length"] == "moyen"

    updated = client.put(
        "/me/preferences",
        json={"default_language": "en", "default_summary_length": "court", "notify_download_success": False},
    )
    assert updated.status_code == 200
    assert client.get("/me/preferences").json()["default_language"] == "en"
    assert client.get("/me/preferences").json()["notify_download_success"] is False


def test_preferences_reject_unknown_language(client):
    assert client.put("/me/preferences", json={"default_language": "xx"}).status_code == 422


def test_protected_routes_require_token(client):
    app.dependency_overrides.pop(get_current_account)
    response = client.get("/me/summaries")
    assert response.status_code == 401
    assert response.json()["detail"] == "Authentification requise."


def test_model_failure_maps_to_502(client, fake_llm):
    fake_llm.responder = lambda prompt, context: "{}"
    response = client.post("/flows/revision-sheet", json={"source_text": LONG_TEXT})
    assert response.status_code == 502
    assert response.json()["detail"].startswith("La génération de la fiche")


def test_request_id_is_echoed_or_replaced(client):
    echoed = client.get("/health", headers={"X-Request-ID": "abc-123"})
    assert echoed.headers["X-Request-ID"] == "abc-123"
    replaced = client.get("/health", headers={"X-Request-ID": "bad id with spaces"})
    assert replaced.headers["X-Request-ID"] != "bad id with spaces"
    assert len(replaced.headers["X-Request-ID"]) == 32


def test_export_unsaved_result(client):
    response = client.post(
        "/summaries:export",
        json={
            "title": "Résumé - Cycle de l'eau",
            "content": "<h3>Résumé</h3><p>Le cycle de l'eau.</p>",
            "quiz_data": SAMPLE_QUIZ,
            "output_format": "qcm",
        },
    )
    assert response.status_code == 200
    assert 'filename="resume_cycle_de_l_eau_qcm_fr.txt"' in response.headers["content-disposition"]
    assert response.text.startswith("Résumé - Cycle de l'eau\n")
    assert "Le cycle de l'eau." in response.text
    assert "QCM" in response.text
    assert "<p>" not in response.text


def test_tts_for_unsaved_result(client, monkeypatch):
    spoken = []

    class FakeTTS:
        def __init__(self, text, lang):
            spoken.append((text, lang))

        def write_to_fp(self, handle):
            handle.write(b"ID3fake")

    monkeypatch.setattr(tts_service, "gTTS", FakeTTS)
    response = client.post("/summaries:tts", json={"content": "<p>Hello world.</p>", "target_language": "en"})
    assert response.status_code == 200
    assert response.headers["content-type"] == "audio/mpeg"
    assert response.content == b"ID3fake"
    assert spoken == [("Hello world.", "en")]
    assert client.get("/me/summaries").json() == []


def test_tts_for_unsaved_result_needs_text(client):
    response = client.post("/summaries:tts", json={"content": "<p>  </p>"})
    assert response.status_code == 400
    assert response.json()["detail"] == "Ce résumé ne contient aucun texte à lire."


def test_me_returns_current_account(client):
    response = client.get("/auth/me")
    assert response.status_code == 200
    assert response.json()["account_id"] == "user-1"
