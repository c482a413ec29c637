"""Shared test fixtures and helpers.

Hypothesis Configuration:
- "ci" profile: Fast tests for CI (100 examples) - default
- "nightly" profile: Thorough tests (1000 examples)
- "debug" profile: Minimal tests with verbose output (10 examples)

Set profile via environment variable:
    HYPOTHESIS_PROFILE=nightly pytest tests/engine/
"""

import os
from pathlib import Path
from typing import Any

import pytest
import yaml
from hypothesis import Phase, Verbosity, settings

# =============================================================================
# Hypothesis Configuration
# =============================================================================

# CI profile: Fast tests for continuous integration
settings.register_profile(
    "ci",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,  # Disable deadline for CI (timing varies)
)

# Nightly profile: Thorough testing for scheduled runs
settings.register_profile(
    "nightly",
    max_examples=1000,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

# Debug profile: Minimal examples with verbose output for debugging
settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

# Load profile from environment, default to "ci"
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))


@pytest.fixture
def user_schema_data() -> dict[str, Any]:
    """Plain-data schema for a user record, in camelCase form."""
    return {
        "type": "object",
        "description": "user",
        "properties": {
            "name": {
                "type": "string",
                "description": "name",
                "minLength": 2,
                "maxLength": 20,
            },
            "age": {"type": "number", "description": "age", "min": 0, "nullable": True},
            "tags": {
                "type": "array",
                "description": "tags",
                "items": {"type": "string", "description": "tag"},
                "every": "len(item) > 0",
            },
        },
    }


@pytest.fixture
def user_schema_file(tmp_path: Path, user_schema_data: dict[str, Any]) -> Path:
    """The user schema written as YAML."""
    schema_file = tmp_path / "user.yaml"
    schema_file.write_text(yaml.safe_dump(user_schema_data, sort_keys=False))
    return schema_file
