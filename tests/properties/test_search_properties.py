"""Property-based tests for search and context invariants.

This module uses Hypothesis to test key invariants:
- Tokenization is idempotent and every token is normalized
- Upserting the same spec twice leaves the index unchanged
- Every posting points at a token present in its field
- Search results respect the limit and are deterministic
- Status counts always sum to the number of specs
"""

import pendulum
from hypothesis import given, settings, strategies as st

from speckeep.context import aggregate_context
from speckeep.search import MIN_TOKEN_LENGTH, QueryEngine, SearchIndex, tokens
from speckeep.spec import SearchOptions, Spec, SpecStatus

# =============================================================================
# Strategies
# =============================================================================

_WORDS = ["alpha", "beta", "gamma", "delta", "cache", "layer", "spec", "a", "x1"]

text = st.text(min_size=0, max_size=120)

word_text = st.lists(st.sampled_from(_WORDS), max_size=12).map(" ".join)

spec_ids = st.text(alphabet="ABCDEFGH0123456789-", min_size=1, max_size=6)

specs = st.builds(
    Spec,
    id=spec_ids,
    title=word_text,
    body=word_text,
    status=st.sampled_from(list(SpecStatus)),
    updated_at=st.integers(min_value=0, max_value=10_000).map(
        lambda n: pendulum.datetime(2024, 1, 1, tz="UTC").add(seconds=n)
    ),
)

spec_lists = st.lists(specs, max_size=15, unique_by=lambda s: s.id)


# =============================================================================
# Tokenization
# =============================================================================


@given(text)
def test_tokens_idempotent(raw: str) -> None:
    first = tokens(raw)

    assert tokens(" ".join(first)) == first


@given(text)
def test_tokens_are_normalized(raw: str) -> None:
    for token in tokens(raw):
        assert len(token) >= MIN_TOKEN_LENGTH
        assert token == token.lower()
        assert token.isalnum()


# =============================================================================
# Index
# =============================================================================


@given(spec_lists)
def test_upsert_idempotent(spec_list: list[Spec]) -> None:
    index = SearchIndex()
    for spec in spec_list:
        index.upsert(spec)
    before = index.snapshot()

    for spec in spec_list:
        index.upsert(spec)

    assert index.snapshot() == before


@given(spec_lists)
def test_postings_match_field_text(spec_list: list[Spec]) -> None:
    index = SearchIndex()
    for spec in spec_list:
        index.upsert(spec)
    snapshot = index.snapshot()

    for token in snapshot.vocabulary:
        postings = snapshot.postings(token)
        assert list(postings) == sorted(postings)
        for posting in postings:
            spec = snapshot.document(posting.spec_id).spec
            field_text = spec.title if posting.field == "title" else spec.body
            assert tokens(field_text)[posting.position] == token


@given(spec_lists)
def test_remove_all_empties_index(spec_list: list[Spec]) -> None:
    index = SearchIndex()
    for spec in spec_list:
        index.upsert(spec)

    for spec in spec_list:
        assert index.remove(spec.id) is True

    assert index.snapshot() == SearchIndex().snapshot()


# =============================================================================
# Query
# =============================================================================


@settings(max_examples=50)
@given(spec_lists, word_text, st.integers(min_value=1, max_value=5))
def test_search_respects_limit_and_is_deterministic(
    spec_list: list[Spec], query: str, limit: int
) -> None:
    index = SearchIndex()
    for spec in spec_list:
        index.upsert(spec)
    engine = QueryEngine(index)

    results = engine.search(query, SearchOptions(limit=limit))

    assert len(results) <= limit
    assert len({r.spec_id for r in results}) == len(results)
    assert engine.search(query, SearchOptions(limit=limit)) == results
    for result in results:
        for start, end in result.highlight_spans:
            assert 0 <= start < end <= len(result.snippet)


# =============================================================================
# Context
# =============================================================================


@given(spec_lists)
def test_status_counts_sum_to_total(spec_list: list[Spec]) -> None:
    context = aggregate_context(spec_list)

    assert sum(context.by_status.values()) == context.total_specs == len(spec_list)
    assert set(context.by_status) == set(SpecStatus)


@given(spec_lists, st.integers(min_value=0, max_value=20))
def test_recently_updated_is_non_increasing(spec_list: list[Spec], limit: int) -> None:
    by_id = {spec.id: spec for spec in spec_list}

    recent = aggregate_context(spec_list, recent_limit=limit).recently_updated

    assert len(recent) == min(limit, len(spec_list))
    stamps = [by_id[spec_id].updated_at for spec_id in recent]
    assert stamps == sorted(stamps, reverse=True)
