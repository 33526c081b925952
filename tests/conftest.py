"""
Shared fixtures for the token-bridge test suite.

Provides test fixtures for:
- A representative canonical token set (dict, JSON and TokenSet forms)
- Source files in each supported input format
- Logging isolation between tests
"""

import json
import logging

import pytest

from token_bridge.bridge_logging import ROOT_LOGGER_NAME
from token_bridge.tokens import TokenSet

# ---------------------------------------------------------------------------
# Canonical tokens
# ---------------------------------------------------------------------------


SAMPLE_TOKENS = {
    "colors": {
        "primary": {"value": "#6750A4", "category": "primary"},
        "on-primary": {"value": "#FFFFFF"},
        "secondary": {"value": "#625B71", "category": "secondary"},
        "surface": {"value": "#FEF7FF", "category": "surface"},
        "background": {"value": "#FFFFFF", "category": "background"},
        "error": {"value": "#B3261E", "category": "error"},
    },
    "typography": {
        "display-large": {"fontSize": 57, "lineHeight": 64, "fontWeight": 400},
        "body-medium": {
            "fontFamily": "Roboto",
            "fontSize": 14,
            "lineHeight": 20,
            "fontWeight": 400,
        },
    },
    "spacing": {"xs": 4, "sm": 8, "md": 16, "lg": 24, "xl": 32},
    "radii": {"sm": 8, "md": 12, "lg": 16, "xl": 28},
    "elevation": {
        "low": {
            "shadowColor": "#000000",
            "shadowOffset": {"x": 0, "y": 2},
            "shadowRadius": 4,
            "shadowOpacity": 0.1,
        }
    },
    "motion": {"fast": {"duration": 150, "easing": "ease-out"}},
}


@pytest.fixture()
def sample_tokens_dict() -> dict:
    """Canonical tokens in wire format (a fresh copy per test)."""
    return json.loads(json.dumps(SAMPLE_TOKENS))


@pytest.fixture()
def sample_tokens_json(sample_tokens_dict) -> str:
    """Canonical tokens as a JSON string."""
    return json.dumps(sample_tokens_dict)


@pytest.fixture()
def sample_tokens(sample_tokens_dict) -> TokenSet:
    """Canonical tokens as a TokenSet."""
    return TokenSet.from_dict(sample_tokens_dict)


# ---------------------------------------------------------------------------
# Source files
# ---------------------------------------------------------------------------


TAILWIND_CONFIG = """/** @type {import('tailwindcss').Config} */
module.exports = {
  content: ['./src/**/*.{js,ts,jsx,tsx}'],
  theme: {
    extend: {
      colors: {
        primary: '#3B82F6',
        gray: { 50: '#F9FAFB', 900: '#111827' },
      },
      spacing: { '72': '18rem' },
      borderRadius: { lg: '0.5rem' },
    },
  },
  plugins: [require('@tailwindcss/forms')],
};
"""

CSS_SOURCE = """
/* Brand palette */
:root {
  --color-primary: #3b82f6;
  --color-accent: rgb(255, 107, 53);
  --spacing-md: 1rem;
  --radius-lg: 12px;
  --font-size-body: 16px;
  --shadow-sm: 0 1px 3px rgba(0, 0, 0, 0.12);
}
"""

DTCG_SOURCE = {
    "color": {
        "$type": "color",
        "brand": {"$value": "#FF5500"},
        "accent": {"$value": "{color.brand}"},
    },
    "space": {"$type": "dimension", "md": {"$value": "16px"}},
}


@pytest.fixture()
def tailwind_config_file(tmp_path):
    """A CommonJS tailwind.config.js on disk."""
    path = tmp_path / "tailwind.config.js"
    path.write_text(TAILWIND_CONFIG)
    return path


@pytest.fixture()
def css_file(tmp_path):
    """A stylesheet with custom properties on disk."""
    path = tmp_path / "tokens.css"
    path.write_text(CSS_SOURCE)
    return path


@pytest.fixture()
def dtcg_file(tmp_path):
    """A DTCG tokens file on disk."""
    path = tmp_path / "design.tokens"
    path.write_text(json.dumps(DTCG_SOURCE))
    return path


@pytest.fixture()
def tokens_file(tmp_path, sample_tokens_json):
    """The sample canonical tokens on disk."""
    path = tmp_path / "tokens.json"
    path.write_text(sample_tokens_json)
    return path


# ---------------------------------------------------------------------------
# Logging isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers installed by setup_logging so tests don't leak them."""
    yield
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
