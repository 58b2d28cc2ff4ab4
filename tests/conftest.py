# === NAVMAP v1 ===
# {
#   "module": "tests.conftest",
#   "purpose": "Shared pytest fixtures for suite",
#   "sections": [
#     {
#       "id": "endpoint-options",
#       "name": "endpoint_options",
#       "anchor": "function-endpoint-options",
#       "kind": "function"
#     }
#   ]
# }
# === /NAVMAP ===

"""
Pytest Configuration

Puts ``src`` on ``sys.path`` so the suite runs from a plain checkout and
registers a stateless Hypothesis profile for the property-based tests.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Dict

import pytest
from hypothesis import HealthCheck, settings

# --- Globals ---

ROOT = Path(__file__).resolve().parent.parent
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

settings.register_profile(
    "test_determinism",
    max_examples=100,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow, HealthCheck.filter_too_much],
    database=None,
)
settings.load_profile("test_determinism")


# --- Fixtures ---


@pytest.fixture
def endpoint_options() -> Dict[str, Any]:
    """Smallest valid option set: only the required endpoint."""

    return {"endpoint": "ws://localhost:4000/socket/websocket"}
