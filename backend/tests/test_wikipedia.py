import httpx
import pytest
from resume_ia.core.errors import FlowError
from resume_ia.schemas.flows import SummarizeWikipediaInput
from resume_ia.services import wikipedia
from resume_ia.services.wikipedia import get_wikipedia_page_content, search_wikipedia
from resume_ia.services.wikipedia_summary import summarize_wikipedia_article

LONG_INTRO = "Paris est la capitale de la France. " * 5


def _install_transport(monkeypatch, handler):
    transport = httpx.MockTransport(handler)
    monkeypatch.setattr(wikipedia, "_http_client", lambda: httpx.Client(transport=transport))


def _wiki_handler(intro=LONG_INTRO, full="Article complet sur Paris.", found=True):
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        params = request.url.params
        seen.append(dict(params))
        if params["action"] == "opensearch":
            if not found:
                return httpx.Response(200, json=[params["search"], [], [], []])
            return httpx.Response(
                200, json=[params["search"], ["Paris"], [""], ["https://fr.wikipedia.org/wiki/Paris"]]
            )
        extract = intro if "exintro" in params else full
        return httpx.Response(200, json={"query": {"pages": {"681159": {"title": "Paris", "extract": extract}}}})

    handler.seen = seen
    return handler


def test_search_returns_first_hit(monkeypatch):
    _install_transport(monkeypatch, _wiki_handler())
    result = search_wikipedia("paris")
    assert result.title == "Paris"
    assert result.url == "https://fr.wikipedia.org/wiki/Paris"


def test_search_without_results(monkeypatch):
    _install_transport(monkeypatch, _wiki_handler(found=False))
    assert search_wikipedia("zzzz") is None


def test_http_error_returns_none(monkeypatch):
    _install_transport(monkeypatch, lambda request: httpx.Response(503))
    assert search_wikipedia("paris") is None
    assert get_wikipedia_page_content("Paris") is None


def test_network_error_returns_none(monkeypatch):
    def handler(request):
        raise httpx.ConnectError("down", request=request)

    _install_transport(monkeypatch, handler)
    assert search_wikipedia("paris") is None


def test_long_intro_is_used(monkeypatch):
    handler = _wiki_handler()
    _install_transport(monkeypatch, handler)
    assert get_wikipedia_page_content("Paris") == LONG_INTRO
    assert len(handler.seen) == 1


def test_short_intro_falls_back_to_full_article(monkeypatch):
    handler = _wiki_handler(intro="Paris.")
    _install_transport(monkeypatch, handler)
    assert get_wikipedia_page_content("Paris") == "Article complet sur Paris."
    assert "exintro" not in handler.seen[-1]


def test_missing_page_returns_none(monkeypatch):
    _install_transport(
        monkeypatch, lambda request: httpx.Response(200, json={"query": {"pages": {"-1": {"missing": ""}}}})
    )
    assert get_wikipedia_page_content("Introuvable") is None


def test_flow_summarizes_article(monkeypatch, fake_llm):
    _install_transport(monkeypatch, _wiki_handler())
    output = summarize_wikipedia_article(SummarizeWikipediaInput(search_term="paris", summary_length="long"))
    assert output.article_title == "Paris"
    assert output.article_url == "https://fr.wikipedia.org/wiki/Paris"
    assert "Wikipédia" in fake_llm.calls[0]["context"]
    assert LONG_INTRO.strip() in fake_llm.calls[0]["context"]


def test_flow_not_found(monkeypatch, fake_llm):
    _install_transport(monkeypatch, _wiki_handler(found=False))
    with pytest.raises(FlowError) as excinfo:
        summarize_wikipedia_article(SummarizeWikipediaInput(search_term="zzzz"))
    assert "zzzz" in excinfo.value.message
    assert fake_llm.calls == []


@pytest.mark.parametrize(
    "payload",
    [
        {"query": {"pages": [{"title": "Paris", "extract": "Texte"}]}},
        {"query": ["pages"]},
        {"query": {"pages": {"1": {"extract": ["liste"]}}}},
    ],
)
def test_malformed_extract_payload_returns_none(monkeypatch, payload):
    _install_transport(monkeypatch, lambda request: httpx.Response(200, json=payload))
    assert get_wikipedia_page_content("Paris") is None


@pytest.mark.parametrize("payload", [["paris", "Paris", "", "url"], ["paris", [None], [""], [None]]])
def test_malformed_search_payload_returns_none(monkeypatch, payload):
    _install_transport(monkeypatch, lambda request: httpx.Response(200, json=payload))
    assert search_wikipedia("paris") is None


def test_flow_reports_malformed_article_as_flow_error(monkeypatch, fake_llm):
    def handler(request):
        if request.url.params["action"] == "opensearch":
            return httpx.Response(200, json=["paris", ["Paris"], [""], ["https://fr.wikipedia.org/wiki/Paris"]])
        return httpx.Response(200, json={"query": {"pages": [{"extract": "Texte"}]}})

    _install_transport(monkeypatch, handler)
    with pytest.raises(FlowError):
        summarize_wikipedia_article(SummarizeWikipediaInput(search_term="paris"))
