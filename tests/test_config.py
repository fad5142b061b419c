"""Tests for configuration helpers."""

from family_memories.config import parse_origins


def test_parse_origins_dedupes_and_adds_client_url() -> None:
    origins = parse_origins(
        "http://localhost:5173, http://localhost:5173/,,",
        "https://memories.example.com",
    )

    assert origins == ["http://localhost:5173", "https://memories.example.com"]


def test_parse_origins_empty() -> None:
    assert parse_origins(None) == []
