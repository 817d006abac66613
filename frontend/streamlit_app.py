import os
import base64
import requests
import streamlit as st
from streamlit.components.v1 import html as components_html
from result_state import export_payload, filename_from_disposition, should_notify, store_result

BACKEND_URL = os.getenv("BACKEND_URL", "http://localhost:8000")

INPUT_TYPES = {
    "Texte": "text",
    "YouTube": "youtube",
    "PDF": "pdf",
    "Wikipédia": "wikipedia",
}
OUTPUT_FORMATS = {
    "Résumé": "resume",
    "Fiche de révision": "fiche",
    "QCM": "qcm",
    "Version Audio": "audio",
}
LANGUAGES = {
    "fr": "Français",
    "en": "Anglais",
    "es": "Espagnol",
    "de": "Allemand",
    "it": "Italien",
    "pt": "Portugais",
    "ja": "Japonais",
    "ko": "Coréen",
}
LENGTHS = {
    "court": "Court",
    "moyen": "Moyen",
    "long": "Long",
    "detaille": "Détaillé",
}

st.set_page_config(page_title="Résumé IA", layout="wide")

st.markdown(
    """
    <style>
    :root {
        --panel-2: #1b2027;
        --border: #2a323d;
        --accent: #18a0fb;
        --text: #f2f4f8;
        --muted: #98a2b3;
    }
    .block-container { padding-top: 1.2rem; padding-bottom: 1rem; }
    [data-testid="stSidebar"] { width: 320px; }
    .summary-box {
        border: 1px solid var(--border);
        padding: 14px;
        border-radius: 10px;
        max-height: 520px;
        overflow-y: auto;
        background: var(--panel-2);
        color: var(--text);
    }
    .summary-meta { color: var(--muted); font-size: 0.9rem; }
    .audio-shell {
        padding: 8px 10px;
        border: 1px solid var(--border);
        border-radius: 10px;
        background: var(--panel-2);
        display: flex;
        align-items: center;
        gap: 10px;
    }
    .audio-shell button {
        background: #161a1f;
        color: var(--text);
        border: 1px solid var(--border);
        border-radius: 8px;
        padding: 6px 10px;
        cursor: pointer;
    }
    @media (max-width: 900px) {
        [data-testid="stSidebar"] { width: 100%; position: relative; }
        [data-testid="stHorizontalBlock"] { flex-direction: column; }
    }
    </style>
    """,
    unsafe_allow_html=True,
)


def auth_headers():
    token = st.session_state.get("id_token")
    return {"Authorization": f"Bearer {token}"} if token else {}


def api_get(path, params=None):
    try:
        return requests.get(f"{BACKEND_URL}{path}", params=params, headers=auth_headers(), timeout=10)
    except requests.RequestException:
        return None


def api_post(path, files=None, json=None, data=None, timeout=30):
    try:
        return requests.post(
            f"{BACKEND_URL}{path}", files=files, json=json, data=data, headers=auth_headers(), timeout=timeout
        )
    except requests.RequestException:
        return None


def api_put(path, json=None):
    try:
        return requests.put(f"{BACKEND_URL}{path}", json=json, headers=auth_headers(), timeout=10)
    except requests.RequestException:
        return None


def api_delete(path):
    try:
        return requests.delete(f"{BACKEND_URL}{path}", headers=auth_headers(), timeout=10)
    except requests.RequestException:
        return None


def error_detail(res, default="Le service est indisponible."):
    if res is None:
        return default
    try:
        detail = res.json().get("detail")
    except ValueError:
        return default
    if isinstance(detail, str):
        return detail
    return default


def fetch_audio(summary_id: str):
    res = api_post(f"/me/summaries/{summary_id}/tts", timeout=120)
    if not res or res.status_code != 200:
        return None, error_detail(res, "La synthèse vocale a échoué.")
    audio = api_get(f"/me/summaries/{summary_id}/audio")
    if not audio or audio.status_code != 200:
        return None, "Audio introuvable."
    return audio.content, None


def speak_text(content: str, language: str):
    res = api_post("/summaries:tts", json={"content": content, "target_language": language}, timeout=120)
    if not res or res.status_code != 200:
        return None, error_detail(res, "La synthèse vocale a échoué.")
    return res.content, None


def fetch_export(saved_id=None, entry=None):
    if saved_id:
        res = api_get(f"/me/summaries/{saved_id}/export")
    else:
        res = api_post("/summaries:export", json=export_payload(entry))
    if not res or res.status_code != 200:
        return None, None
    return res.text, filename_from_disposition(res.headers.get("Content-Disposition"))


def notify(event, message):
    if should_notify(st.session_state.get("preferences"), event):
        st.toast(message)


def render_audio_player(audio_bytes: bytes) -> None:
    b64 = base64.b64encode(audio_bytes).decode("ascii")
    html = f"""
    <div class="audio-shell">
      <button onclick="var a=document.getElementById('tts-audio'); a.currentTime=Math.max(0,a.currentTime-10);">-10s</button>
      <button onclick="var a=document.getElementById('tts-audio'); a.currentTime=Math.min(a.duration,a.currentTime+10);">+10s</button>
      <select onchange="document.getElementById('tts-audio').playbackRate=parseFloat(this.value);">
        <option value="0.9">0.9x</option>
        <option value="1" selected>1.0x</option>
        <option value="1.25">1.25x</option>
      </select>
      <audio id="tts-audio" controls style="width:100%;">
        <source src="data:audio/mpeg;base64,{b64}">
      </audio>
    </div>
    """
    components_html(html, height=80)


def render_quiz(quiz, key_prefix):
    """Interactive QCM: answers are revealed once the user validates."""
    submitted_key = f"{key_prefix}_submitted"
    answers = {}
    for index, question in enumerate(quiz["questions"], start=1):
        options = {option["id"]: option["text"] for option in question["options"]}
        answers[question["id"]] = st.radio(
            f"{index}. {question['question_text']}",
            list(options.keys()),
            format_func=lambda option_id, opts=options: opts[option_id],
            index=None,
            key=f"{key_prefix}_{question['id']}",
        )
    if st.button("Valider mes réponses", key=f"{key_prefix}_submit"):
        st.session_state[submitted_key] = True
    if not st.session_state.get(submitted_key):
        return
    score = 0
    for question in quiz["questions"]:
        correct = answers.get(question["id"]) == question["correct_answer_id"]
        score += int(correct)
        correct_text = next(o["text"] for o in question["options"] if o["id"] == question["correct_answer_id"])
        if correct:
            st.success(f"{question['question_text']} : bonne réponse.")
        else:
            st.error(f"{question['question_text']} : la bonne réponse était « {correct_text} ».")
        if question.get("explanation"):
            st.caption(question["explanation"])
    st.info(f"Score : {score} / {len(quiz['questions'])}")


def render_result(result, key_prefix, saved_id=None, entry=None):
    st.subheader(result["title"])
    if result.get("source_url"):
        st.markdown(f"<div class='summary-meta'>Source : {result['source_url']}</div>", unsafe_allow_html=True)
    st.markdown(f"<div class='summary-box'>{result['content']}</div>", unsafe_allow_html=True)
    if result.get("quiz_data"):
        st.markdown("#### QCM")
        render_quiz(result["quiz_data"], key_prefix)

    plain_text, filename = fetch_export(saved_id, entry)
    cols = st.columns([1, 1, 1, 1])
    if plain_text:
        cols[0].download_button(
            "Télécharger (.txt)",
            plain_text,
            file_name=filename,
            mime="text/plain",
            key=f"{key_prefix}_dl",
            on_click=notify,
            args=("download", "Résumé téléchargé."),
        )
    if cols[1].button("Écouter le résumé", key=f"{key_prefix}_listen"):
        with st.spinner("Génération de l'audio..."):
            if saved_id:
                audio_bytes, error = fetch_audio(saved_id)
            else:
                audio_bytes, error = speak_text(result["content"], entry["request"]["target_language"])
        if error:
            st.error(error)
        else:
            render_audio_player(audio_bytes)
    share_key = f"{key_prefix}_share"
    if plain_text and cols[2].button("Copier / partager", key=f"{key_prefix}_share_btn"):
        st.session_state[share_key] = True
        notify("share", "Texte prêt à être copié.")
    if saved_id and cols[3].button("Supprimer", key=f"{key_prefix}_delete"):
        res = api_delete(f"/me/summaries/{saved_id}")
        if res and res.status_code == 200:
            st.success("Résumé supprimé.")
            st.rerun()
        else:
            st.error(error_detail(res))
    if plain_text and st.session_state.get(share_key):
        # st.code renders a copy-to-clipboard button
        st.code(plain_text, language=None)


def sign_in_panel():
    st.sidebar.title("Résumé IA")
    if st.session_state.get("id_token"):
        account = st.session_state.get("account") or {}
        st.sidebar.caption(f"Connecté : {account.get('display_name') or account.get('email')}")
        if st.sidebar.button("Se déconnecter"):
            for key in ("id_token", "account", "preferences", "last_result"):
                st.session_state.pop(key, None)
            st.rerun()
        return

    mode = st.sidebar.radio("Compte", ["Connexion", "Inscription", "Mot de passe oublié"])
    email = st.sidebar.text_input("Adresse e-mail")
    if mode == "Mot de passe oublié":
        if st.sidebar.button("Envoyer l'email de réinitialisation"):
            res = api_post("/auth/password-reset", json={"email": email})
            if res and res.status_code == 200:
                st.sidebar.success("Email de réinitialisation envoyé.")
            else:
                st.sidebar.error(error_detail(res))
        return

    password = st.sidebar.text_input("Mot de passe", type="password")
    if mode == "Inscription":
        confirm = st.sidebar.text_input("Confirmer le mot de passe", type="password")
        display_name = st.sidebar.text_input("Nom affiché")
        if st.sidebar.button("Créer mon compte"):
            res = api_post(
                "/auth/signup",
                json={"email": email, "password": password, "confirm_password": confirm, "display_name": display_name or None},
            )
            if res and res.status_code == 201:
                start_session(res.json())
            else:
                st.sidebar.error(error_detail(res))
        return

    if st.sidebar.button("Se connecter"):
        res = api_post("/auth/signin", json={"email": email, "password": password})
        if res and res.status_code == 200:
            start_session(res.json())
        else:
            st.sidebar.error(error_detail(res))


def start_session(session):
    st.session_state["id_token"] = session["id_token"]
    me = api_get("/auth/me")
    st.session_state["account"] = me.json() if me and me.status_code == 200 else session
    prefs = api_get("/me/preferences")
    if prefs and prefs.status_code == 200:
        st.session_state["preferences"] = prefs.json()
    st.rerun()


def generate_tab():
    prefs = st.session_state.get("preferences") or {}
    input_label = st.radio("Source", list(INPUT_TYPES.keys()), horizontal=True)
    input_type = INPUT_TYPES[input_label]

    uploaded = None
    value = ""
    if input_type == "text":
        value = st.text_area("Texte à résumer", height=220, placeholder="Collez votre texte ici (50 caractères minimum).")
    elif input_type == "youtube":
        value = st.text_input("URL de la vidéo YouTube")
    elif input_type == "wikipedia":
        value = st.text_input("Terme de recherche Wikipédia")
    else:
        uploaded = st.file_uploader("Fichier PDF", type=["pdf"])

    cols = st.columns(3)
    format_label = cols[0].selectbox("Format de sortie", list(OUTPUT_FORMATS.keys()))
    languages = list(LANGUAGES.keys())
    language = cols[1].selectbox(
        "Langue",
        languages,
        index=languages.index(prefs.get("default_language", "fr")),
        format_func=LANGUAGES.get,
    )
    lengths = list(LENGTHS.keys())
    length = cols[2].selectbox(
        "Longueur",
        lengths,
        index=lengths.index(prefs.get("default_summary_length", "moyen")),
        format_func=LENGTHS.get,
    )
    output_format = OUTPUT_FORMATS[format_label]

    if st.button("Générer", type="primary"):
        with st.spinner("Génération en cours..."):
            if input_type == "pdf":
                if not uploaded:
                    st.error("Veuillez sélectionner un fichier PDF.")
                    return
                res = api_post(
                    "/summaries:generate-pdf",
                    files={"file": (uploaded.name, uploaded.getvalue(), "application/pdf")},
                    data={"output_format": output_format, "target_language": language, "summary_length": length},
                    timeout=180,
                )
                value = uploaded.name
            else:
                res = api_post(
                    "/summaries:generate",
                    json={
                        "input_type": input_type,
                        "input_value": value,
                        "output_format": output_format,
                        "target_language": language,
                        "summary_length": length,
                    },
                    timeout=180,
                )
        if res and res.status_code == 200:
            store_result(
                st.session_state,
                res.json(),
                {
                    "input_type": input_type,
                    "input_value": value,
                    "output_format": output_format,
                    "target_language": language,
                    "summary_length": length,
                },
            )
        else:
            st.error(error_detail(res))

    last = st.session_state.get("last_result")
    if not last:
        return
    if st.session_state.get("save_notice"):
        st.success(st.session_state.pop("save_notice"))
    render_result(last["result"], last["key_prefix"], saved_id=last.get("saved_id"), entry=last)
    if last.get("saved_id"):
        return
    if st.button("Enregistrer dans mes résumés", key=f"{last['key_prefix']}_save"):
        payload = {**last["request"], **last["result"]}
        res = api_post("/me/summaries", json=payload)
        if res and res.status_code == 201:
            last["saved_id"] = res.json()["id"]
            st.session_state["save_notice"] = "Résumé enregistré."
            st.rerun()
        else:
            st.error(error_detail(res))


def saved_tab():
    res = api_get("/me/summaries")
    if not res or res.status_code != 200:
        st.error(error_detail(res))
        return
    summaries = res.json()
    if not summaries:
        st.info("Aucun résumé enregistré pour le moment.")
        return
    for summary in summaries:
        label = f"{summary['title']} · {summary['created_at'][:16].replace('T', ' ')}"
        with st.expander(label):
            render_result(summary, f"saved_{summary['id']}", saved_id=summary["id"])


def profile_tab():
    account = st.session_state.get("account") or {}
    st.markdown(f"**Adresse e-mail :** {account.get('email', '')}")
    if not account.get("email_verified"):
        st.warning("Votre adresse e-mail n'est pas vérifiée.")
        if st.button("Renvoyer l'email de vérification"):
            res = api_post("/auth/verify-email")
            if res and res.status_code == 200:
                st.success("Email de vérification envoyé.")
            else:
                st.error(error_detail(res))

    new_name = st.text_input("Nom affiché", value=account.get("display_name") or "")
    if st.button("Mettre à jour le nom"):
        res = api_put("/auth/me/display-name", json={"display_name": new_name})
        if res and res.status_code == 200:
            st.session_state["account"] = res.json()
            st.success("Nom mis à jour.")
        else:
            st.error(error_detail(res))

    st.markdown("#### Préférences")
    prefs = st.session_state.get("preferences") or {}
    languages = list(LANGUAGES.keys())
    lengths = list(LENGTHS.keys())
    default_language = st.selectbox(
        "Langue par défaut",
        languages,
        index=languages.index(prefs.get("default_language", "fr")),
        format_func=LANGUAGES.get,
        key="pref_language",
    )
    default_length = st.selectbox(
        "Longueur par défaut",
        lengths,
        index=lengths.index(prefs.get("default_summary_length", "moyen")),
        format_func=LENGTHS.get,
        key="pref_length",
    )
    notify_download = st.checkbox(
        "Notification après téléchargement", value=prefs.get("notify_download_success", True)
    )
    notify_share = st.checkbox("Notification après partage", value=prefs.get("notify_share_success", True))
    if st.button("Enregistrer les préférences"):
        res = api_put(
            "/me/preferences",
            json={
                "default_language": default_language,
                "default_summary_length": default_length,
                "notify_download_success": notify_download,
                "notify_share_success": notify_share,
            },
        )
        if res and res.status_code == 200:
            st.session_state["preferences"] = res.json()
            st.success("Préférences enregistrées.")
        else:
            st.error(error_detail(res))


sign_in_panel()

if not st.session_state.get("id_token"):
    st.title("Résumé IA")
    st.info("Connectez-vous pour générer et enregistrer vos résumés.")
else:
    tabs = st.tabs(["Générer", "Mes résumés", "Profil"])
    with tabs[0]:
        generate_tab()
    with tabs[1]:
        saved_tab()
    with tabs[2]:
        profile_tab()
