"""Tests for SubstackifyConfig validation and the error hierarchy."""

import pytest

from substackify import AUDIENCES, SubstackifyConfig
from substackify.errors import ErrorCode, SubstackifyError, SubstackifyValidationError


class TestConfig:

    def test_defaults(self):
        cfg = SubstackifyConfig()
        assert cfg.audience == "everyone"
        assert cfg.section == ""
        assert cfg.draft_type == "newsletter"
        assert cfg.strip_leading_newlines is True
        assert cfg.debug_dump_ast is False
        assert cfg.debug_dump_payload is False

    @pytest.mark.parametrize("audience", AUDIENCES)
    def test_valid_audiences(self, audience):
        assert SubstackifyConfig(audience=audience).audience == audience

    def test_invalid_audience(self):
        with pytest.raises(ValueError, match="audience"):
            SubstackifyConfig(audience="vip")

    def test_empty_draft_type(self):
        with pytest.raises(ValueError, match="draft_type"):
            SubstackifyConfig(draft_type="")


class TestErrors:

    def test_validation_error_fields(self):
        err = SubstackifyValidationError("bad", context={"field": "audience"})
        assert isinstance(err, SubstackifyError)
        assert err.code == ErrorCode.VALIDATION_ERROR
        assert err.message == "bad"
        assert str(err) == "bad"
        assert err.context == {"field": "audience"}

    def test_cause_chained(self):
        cause = KeyError("x")
        err = SubstackifyError("CUSTOM", "wrapped", cause=cause)
        assert err.cause is cause
        assert err.__cause__ is cause
        assert err.context == {}

    def test_repr(self):
        err = SubstackifyValidationError("bad", context={"value": 1})
        text = repr(err)
        assert text.startswith("SubstackifyValidationError(")
        assert "context={'value': 1}" in text

    def test_error_code_is_str(self):
        assert ErrorCode.VALIDATION_ERROR == "VALIDATION_ERROR"
