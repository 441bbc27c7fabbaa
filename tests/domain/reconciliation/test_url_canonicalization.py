from __future__ import annotations

from catalogsync.domain.reconciliation import canonical_key, canonical_set, deduplicate


def test_canonical_key_is_case_insensitive() -> None:
    assert canonical_key("https://GitHub.com/Owner/Repo.git") == canonical_key(
        "https://github.com/owner/repo.git"
    )


def test_canonical_key_keeps_the_rest_of_the_url() -> None:
    assert canonical_key("https://github.com/a/b.git") != canonical_key("https://github.com/a/b")


def test_canonical_set_keeps_first_seen_representative() -> None:
    result = canonical_set(
        [
            "https://github.com/Owner/Repo.git",
            "https://github.com/owner/repo.git",
            "https://github.com/other/lib.git",
        ]
    )

    assert list(result.values()) == [
        "https://github.com/Owner/Repo.git",
        "https://github.com/other/lib.git",
    ]


def test_deduplicate_preserves_order() -> None:
    urls = ["https://x/c", "https://x/A", "https://x/b", "https://X/a", "https://x/c"]

    assert deduplicate(urls) == ["https://x/c", "https://x/A", "https://x/b"]


def test_deduplicate_empty() -> None:
    assert deduplicate([]) == []
