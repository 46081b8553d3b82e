"""
Test Configuration
==================

Pytest fixtures for the DCR service tests.
"""

import os
from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Set test environment
os.environ["ENVIRONMENT"] = "testing"


SCENARIO_XML = """<?xml version="1.0" encoding="UTF-8"?>
<constraints>
  <conditions>
    <condition sourceId="A" targetId="B"/>
  </conditions>
  <responses>
    <response sourceId="B" targetId="C"/>
  </responses>
  <includes>
    <include sourceId="B" targetId="D"/>
  </includes>
  <excludes/>
</constraints>
"""


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    """Use asyncio backend for async tests."""
    return "asyncio"


@pytest_asyncio.fixture
async def dcr_graph_client() -> AsyncGenerator[AsyncClient, None]:
    """Create test client for the DCR Graph Service."""
    from services.dcr_graph.main import app

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client


@pytest_asyncio.fixture
async def subscriptions_client() -> AsyncGenerator[AsyncClient, None]:
    """Create test client for a fresh Subscription Service instance."""
    from services.subscriptions.main import create_app

    async with AsyncClient(
        transport=ASGITransport(app=create_app()),
        base_url="http://test",
    ) as client:
        yield client


@pytest.fixture
def scenario_xml() -> str:
    """Conditions A->B, responses B->C, includes B->D, no excludes."""
    return SCENARIO_XML


def build_constraints_xml(
    conditions: list[tuple[str, str]] | None = None,
    responses: list[tuple[str, str]] | None = None,
    includes: list[tuple[str, str]] | None = None,
    excludes: list[tuple[str, str]] | None = None,
) -> str:
    """Render relation pairs as a constraint document."""
    groups = {
        "condition": conditions,
        "response": responses,
        "include": includes,
        "exclude": excludes,
    }

    parts = ["<constraints>"]
    for element, pairs in groups.items():
        if pairs is None:
            continue
        parts.append(f"<{element}s>")
        for source, target in pairs:
            parts.append(f'<{element} sourceId="{source}" targetId="{target}"/>')
        parts.append(f"</{element}s>")
    parts.append("</constraints>")

    return "".join(parts)


@pytest.fixture
def constraints_xml():
    """Factory fixture building constraint documents from relation pairs."""
    return build_constraints_xml
