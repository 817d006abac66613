from result_state import export_payload, filename_from_disposition, should_notify, store_result
from conftest import SAMPLE_QUIZ

REQUEST = {
    "input_type": "text",
    "input_value": "x" * 60,
    "output_format": "qcm",
    "target_language": "en",
    "summary_length": "court",
}


def test_each_result_gets_fresh_widget_keys():
    state = {}
    first = store_result(state, {"title": "A", "content": "<p>a</p>"}, REQUEST)
    # an answer picked on the first quiz
    state[f"{first['key_prefix']}_q1"] = "q1b"
    second = store_result(state, {"title": "B", "content": "<p>b</p>"}, REQUEST)

    assert first["key_prefix"] != second["key_prefix"]
    assert f"{second['key_prefix']}_q1" not in state
    assert state["last_result"] is second
    assert second["saved_id"] is None


def test_notifications_follow_their_own_preference():
    prefs = {"notify_download_success": False, "notify_share_success": True}
    assert should_notify(prefs, "download") is False
    assert should_notify(prefs, "share") is True
    assert should_notify(None, "download") is True


def test_export_payload_uses_request_format_and_language():
    entry = store_result({}, {"title": "Quiz", "content": "<p>c</p>", "quiz_data": SAMPLE_QUIZ}, REQUEST)
    payload = export_payload(entry)
    assert payload["output_format"] == "qcm"
    assert payload["target_language"] == "en"
    assert payload["quiz_data"] == SAMPLE_QUIZ


def test_filename_from_disposition():
    assert filename_from_disposition('attachment; filename="quiz_qcm_en.txt"') == "quiz_qcm_en.txt"
    assert filename_from_disposition(None) == "resume.txt"
    assert filename_from_disposition("attachment") == "resume.txt"
