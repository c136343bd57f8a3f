from pathlib import Path
from typing import Any, Dict

import pytest
import yaml

from swagger_typings.models import Document, Resource

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def make_document():
    """Build a Document from raw Swagger data for a given source/name."""

    def factory(data: Dict[str, Any], source: str = "user-center", name: str = "users") -> Document:
        resource = Resource(source=source, name=name, url=f"http://svc.local/{source}/{name}")
        return Document.model_validate(dict(data, resource=resource))

    return factory


@pytest.fixture
def users_fixture():
    """Raw input and expected output of the users fixture."""
    fixture_dir = FIXTURES / "users"
    with open(fixture_dir / "input.yaml") as f:
        spec = yaml.safe_load(f)
    expected = (fixture_dir / "expected.d.ts").read_text(encoding="utf-8")
    return spec, expected
