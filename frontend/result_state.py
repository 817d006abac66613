"""Session-state helpers for the Streamlit client, kept free of Streamlit imports."""

NOTIFY_PREFS = {
    "download": "notify_download_success",
    "share": "notify_share_success",
}


def store_result(state, result, request):
    """Record a fresh result under a new generation.

    Widget keys derive from ``key_prefix``, so quiz answers given on a previous
    result never pre-select options on the next one.
    """
    generation = state.get("generation", 0) + 1
    state["generation"] = generation
    entry = {
        "result": result,
        "request": request,
        "saved_id": None,
        "key_prefix": f"current_{generation}",
    }
    state["last_result"] = entry
    return entry


def should_notify(prefs, event):
    return bool((prefs or {}).get(NOTIFY_PREFS[event], True))


def export_payload(entry):
    result = entry["result"]
    request = entry["request"]
    return {
        "title": result["title"],
        "content": result["content"],
        "quiz_data": result.get("quiz_data"),
        "output_format": request["output_format"],
        "target_language": request["target_language"],
    }


def filename_from_disposition(header, default="resume.txt"):
    if not header or 'filename="' not in header:
        return default
    return header.split('filename="', 1)[1].split('"', 1)[0] or default
