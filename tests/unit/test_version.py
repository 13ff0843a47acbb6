"""
Unit tests for version tracking.
"""

import pytest
from pydantic import ValidationError

from prompt_cleaner.version import (
    CLEANER_VERSION,
    PARSER_VERSION,
    RENDERER_VERSION,
    get_current_cleaner_version,
)


class TestCleanerVersion:
    """Tests for get_current_cleaner_version()."""

    @pytest.mark.unit
    def test_current_versions(self):
        version = get_current_cleaner_version()
        assert version.cleaner_version == CLEANER_VERSION
        assert version.parser_version == PARSER_VERSION

    @pytest.mark.unit
    def test_to_repr(self):
        assert get_current_cleaner_version().to_repr() == (
            f"{CLEANER_VERSION}/{PARSER_VERSION}/{RENDERER_VERSION}"
        )

    @pytest.mark.unit
    def test_frozen(self):
        with pytest.raises(ValidationError):
            get_current_cleaner_version().parser_version = "other"
