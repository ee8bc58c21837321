import random

import pytest

from tests.helpers import StubLookup, SyncStubLookup
from pagevideo_server.core.error import LookupFailure, PageVideoError
from pagevideo_server.search.orchestrator import SearchOrchestrator, TieBreak, is_valid_url, parse_tie_break, resolve


@pytest.mark.asyncio
async def test_empty_keywords_resolve_to_not_found_without_lookup():
    stub = StubLookup({"cell": ["https://v/1"]})
    result = await resolve([], stub)

    assert result["status"] == "not_found"
    assert result["url"] is None
    assert result["diagnostic"] == "empty_recognition"
    assert stub.calls == []


@pytest.mark.asyncio
async def test_all_empty_outcomes_resolve_to_not_found():
    stub = StubLookup({})
    result = await resolve(["mitosis", "cell"], stub)

    assert result["status"] == "not_found"
    assert result["diagnostic"] == "no_match"
    assert sorted(stub.calls) == ["cell", "mitosis"]


@pytest.mark.asyncio
async def test_mitosis_cell_division_scenario():
    stub = StubLookup({"mitosis": [], "cell": ["https://v/1"], "division": []})
    result = await resolve(["mitosis", "cell", "division"], stub)

    assert result["status"] == "found"
    assert result["url"] == "https://v/1"
    assert result["keyword"] == "cell"
    assert result["n_keywords"] == 3


@pytest.mark.asyncio
async def test_single_match_uses_first_record_url():
    stub = StubLookup({"cell": ["https://v/first", "https://v/second"]})
    result = await resolve(["page", "cell"], stub)

    assert result["url"] == "https://v/first"


@pytest.mark.asyncio
async def test_duplicates_are_each_looked_up():
    stub = StubLookup({})
    await resolve(["cell", "cell", "cell"], stub)

    assert stub.calls == ["cell", "cell", "cell"]


@pytest.mark.asyncio
async def test_lookups_are_dispatched_concurrently():
    keywords = [f"kw{i}" for i in range(10)]
    stub = StubLookup({}, default_latency=0.02)
    await resolve(keywords, stub)

    assert stub.max_in_flight == len(keywords)


@pytest.mark.asyncio
async def test_lookup_failure_is_absorbed():
    stub = StubLookup({
        "mitosis": LookupFailure("store unavailable", keyword="mitosis"),
        "cell": ["https://v/1"],
    })
    result = await resolve(["mitosis", "cell"], stub)

    assert result["status"] == "found"
    assert result["url"] == "https://v/1"
    assert result["n_failed"] == 1
    assert "mitosis" in result["errors"]


@pytest.mark.asyncio
async def test_all_failures_resolve_to_not_found():
    stub = StubLookup({"a": RuntimeError("boom"), "b": ConnectionError("connection reset")})
    result = await resolve(["a", "b"], stub)

    assert result["status"] == "not_found"
    assert result["n_failed"] == 2
    assert result["errors"]["b"].startswith("network_error")


@pytest.mark.asyncio
async def test_first_keyword_wins_regardless_of_completion_order():
    # "early" finishes last but sits first in the text
    stub = StubLookup(
        {"early": ["https://v/early"], "late": ["https://v/late"]},
        latencies={"early": 0.05, "late": 0.0},
    )
    result = await resolve(["early", "late"], stub, tie_break=TieBreak.FIRST_KEYWORD)

    assert result["url"] == "https://v/early"


@pytest.mark.asyncio
async def test_last_completed_keeps_the_last_finishing_match():
    stub = StubLookup(
        {"early": ["https://v/early"], "late": ["https://v/late"]},
        latencies={"early": 0.0, "late": 0.05},
    )
    result = await resolve(["early", "late"], stub, tie_break="last_completed")

    assert result["url"] == "https://v/late"


@pytest.mark.asyncio
async def test_resolution_is_idempotent_with_deterministic_lookup():
    stub = StubLookup({"b": ["https://v/b"], "d": ["https://v/d"]})
    orchestrator = SearchOrchestrator(stub)

    first = await orchestrator.resolve(["a", "b", "c", "d"])
    second = await orchestrator.resolve(["a", "b", "c", "d"])

    assert first == second
    assert first["url"] == "https://v/b"


@pytest.mark.asyncio
@pytest.mark.parametrize("tie_break", [TieBreak.FIRST_KEYWORD, TieBreak.LAST_COMPLETED])
async def test_fifty_keywords_with_random_latencies(tie_break):
    rng = random.Random(7)
    keywords = [f"kw{i}" for i in range(50)]
    matching = {f"kw{i}": [f"https://v/{i}"] for i in range(0, 50, 7)}
    latencies = {kw: rng.uniform(0.0, 0.02) for kw in keywords}
    stub = StubLookup(matching, latencies=latencies)

    result = await resolve(keywords, stub, tie_break=tie_break)

    assert result["status"] == "found"
    assert result["n_keywords"] == 50
    assert len(stub.calls) == 50
    assert stub.in_flight == 0
    if tie_break is TieBreak.FIRST_KEYWORD:
        assert result["url"] == "https://v/0"
    else:
        assert result["url"] in {urls[0] for urls in matching.values()}


@pytest.mark.asyncio
async def test_slow_lookup_past_deadline_counts_as_empty():
    stub = StubLookup(
        {"stuck": ["https://v/stuck"], "cell": ["https://v/1"]},
        latencies={"stuck": 5.0},
    )
    result = await resolve(["stuck", "cell"], stub, lookup_timeout=0.05)

    assert result["url"] == "https://v/1"
    assert result["n_failed"] == 1
    assert result["errors"]["stuck"].startswith("timeout")


@pytest.mark.asyncio
async def test_malformed_winning_url_is_not_found_with_diagnostic():
    stub = StubLookup({"cell": ["not a url"]})
    result = await resolve(["cell"], stub)

    assert result["status"] == "not_found"
    assert result["url"] is None
    assert result["diagnostic"] == "malformed_url"
    assert result["keyword"] == "cell"


@pytest.mark.asyncio
async def test_synchronous_lookup_client_runs_in_executor():
    stub = SyncStubLookup({"division": ["https://v/3"]})
    result = await resolve(["mitosis", "division"], stub)

    assert result["url"] == "https://v/3"
    assert sorted(stub.calls) == ["division", "mitosis"]


@pytest.mark.asyncio
async def test_synchronous_lookups_beyond_default_pool_size_meet_deadline():
    # more blocking lookups than the loop's default executor runs at once
    keywords = [f"kw{i}" for i in range(50)]
    stub = SyncStubLookup({"kw40": ["https://v/40"]}, latency=0.1)

    result = await resolve(keywords, stub, lookup_timeout=0.5)

    assert result["status"] == "found"
    assert result["url"] == "https://v/40"
    assert result["n_failed"] == 0
    assert len(stub.calls) == 50


@pytest.mark.asyncio
@pytest.mark.parametrize("lookup_timeout", [0, -1])
async def test_non_positive_timeout_means_no_deadline(lookup_timeout):
    stub = StubLookup({"cell": ["https://v/1"]}, default_latency=0.01)
    result = await resolve(["mitosis", "cell"], stub, lookup_timeout=lookup_timeout)

    assert result["status"] == "found"
    assert result["url"] == "https://v/1"
    assert result["n_failed"] == 0


def test_parse_tie_break():
    assert parse_tie_break(None) is TieBreak.FIRST_KEYWORD
    assert parse_tie_break(" LAST_COMPLETED ") is TieBreak.LAST_COMPLETED
    with pytest.raises(PageVideoError):
        parse_tie_break("random")


def test_is_valid_url():
    assert is_valid_url("https://videos.example.com/a.mp4")
    assert not is_valid_url("videos.example.com/a.mp4")
    assert not is_valid_url("ftp://videos.example.com/a.mp4")
    assert not is_valid_url("")


def test_orchestrator_from_env(monkeypatch):
    monkeypatch.setenv("PAGEVIDEO_TIE_BREAK", "last_completed")
    monkeypatch.setenv("PAGEVIDEO_LOOKUP_TIMEOUT", "0")
    orchestrator = SearchOrchestrator.from_env(StubLookup({}))

    assert orchestrator.tie_break is TieBreak.LAST_COMPLETED
    assert orchestrator.lookup_timeout is None
