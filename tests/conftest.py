"""Shared fixtures built on the port fakes."""
import pytest
from fakes import InMemoryCacheStore, MemoryRequestLog, make_node, make_payload


@pytest.fixture
def store():
    return InMemoryCacheStore()


@pytest.fixture
def request_log():
    return MemoryRequestLog()


@pytest.fixture
def deno_payload():
    return make_payload(
        make_node(
            "denoland/deno",
            90000,
            description="x" * 120,
            languages=("Rust", "JavaScript", "TypeScript")
        )
    )
