"""
Hypothesis configuration for property-based testing.

Profiles for the splurge-enzyme-to-rtl property tests. Every example
parses a source file with tree-sitter, so example counts stay modest.
Select a profile with ``--hypothesis-profile`` (``default``, ``ci`` or
``fast``).
"""

import hypothesis
from hypothesis import HealthCheck, Phase, settings

_PHASES = [Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink]

hypothesis.settings.register_profile(
    "default",
    settings(
        database=None,  # No example database between runs
        print_blob=True,
        max_examples=60,
        deadline=None,  # Parsing time varies with the grammar load
        derandomize=True,
        phases=_PHASES,
        suppress_health_check=[HealthCheck.too_slow],
    ),
)

hypothesis.settings.register_profile(
    "ci",
    settings(
        database=None,
        print_blob=True,
        max_examples=200,
        deadline=None,
        derandomize=True,
        phases=[*_PHASES, Phase.target],
        suppress_health_check=[HealthCheck.too_slow],
    ),
)

hypothesis.settings.register_profile(
    "fast",
    settings(
        database=None,
        max_examples=20,
        deadline=None,
        derandomize=True,
        phases=_PHASES,
    ),
)

hypothesis.settings.load_profile("default")

# Settings decorators imported by test modules
DEFAULT_SETTINGS = settings(
    max_examples=60,
    deadline=None,
    print_blob=True,
    derandomize=True,
    suppress_health_check=[HealthCheck.too_slow],
)

# Whole-pipeline properties run the full codemod per example
PIPELINE_SETTINGS = settings(
    max_examples=25,
    deadline=None,
    print_blob=True,
    derandomize=True,
    suppress_health_check=[HealthCheck.too_slow],
)
