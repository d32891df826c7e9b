import re

import pytest

from ran_bot.memory.cache.slug import normalize_slug


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("Hello World", "hello-world"),
        ("already-normal", "already-normal"),
        ("  Spaces   everywhere  ", "spaces-everywhere"),
        ("C++ & Rust: a comparison!", "c-rust-a-comparison"),
        ("--leading-and-trailing--", "leading-and-trailing"),
        ("multiple___under__scores", "multiple-under-scores"),
        ("Café au lait", "caf-au-lait"),
        ("2024 Recap", "2024-recap"),
        ("", ""),
        ("!!!", ""),
        ("---", ""),
    ],
)
def test_normalize_slug_examples(raw, expected):
    assert normalize_slug(raw) == expected


def test_normalize_slug_handles_none():
    assert normalize_slug(None) == ""


SAMPLES = [
    "Hello World",
    "ÅngströM--units__",
    "a",
    "-a-",
    "x--y",
    "émoji 🎉 party",
    "tabs\tand\nnewlines",
    "MiXeD-CaSe_123",
    "   ",
    "/ran/some-slug?page=2",
]


@pytest.mark.parametrize("raw", SAMPLES)
def test_normalize_slug_output_shape(raw):
    slug = normalize_slug(raw)

    assert re.fullmatch(r"[a-z0-9-]*", slug)
    assert not slug.startswith("-")
    assert not slug.endswith("-")
    assert "--" not in slug


@pytest.mark.parametrize("raw", SAMPLES)
def test_normalize_slug_is_idempotent(raw):
    once = normalize_slug(raw)
    assert normalize_slug(once) == once
