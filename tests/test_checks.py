"""Tests for response acceptability checks"""

import pytest
import requests

from retryable_http.domain.checks import default_acceptability_check, status_code_check
from retryable_http.domain.errors import (
    MissingResponseError,
    UnacceptableResponseError,
    UnsuccessfulStatusCodeError,
)


def _make_response(status_code: int) -> requests.Response:
    r = requests.Response()
    r.status_code = status_code
    return r


class TestDefaultCheck:
    """Tests for default_acceptability_check"""

    @pytest.mark.parametrize("status_code", [200, 201, 204, 250, 299])
    def test_accepts_2xx(self, status_code):
        """Test that every 2xx status is accepted"""
        assert default_acceptability_check(_make_response(status_code)) is None

    @pytest.mark.parametrize("status_code", [100, 199, 300, 304, 400, 404, 429, 500, 503])
    def test_rejects_other_status(self, status_code):
        """Test that non-2xx statuses are rejected with the status code attached"""
        response = _make_response(status_code)
        error = default_acceptability_check(response)
        assert isinstance(error, UnsuccessfulStatusCodeError)
        assert error.status_code == status_code
        assert error.response is response
        assert str(status_code) in str(error)

    def test_rejects_missing_response(self):
        """Test that a missing response is rejected"""
        error = default_acceptability_check(None)
        assert isinstance(error, MissingResponseError)
        assert isinstance(error, UnacceptableResponseError)
        assert error.response is None


class TestStatusCodeCheck:
    """Tests for status_code_check factory"""

    def test_default_range_returns_default_check(self):
        """Test that the 2xx range reuses the default check"""
        assert status_code_check() is default_acceptability_check

    def test_single_status(self):
        """Test a range containing a single status code"""
        check = status_code_check(200, 200)
        assert check(_make_response(200)) is None
        assert isinstance(check(_make_response(201)), UnsuccessfulStatusCodeError)

    def test_custom_range_is_inclusive(self):
        """Test that both bounds are accepted"""
        check = status_code_check(200, 404)
        assert check(_make_response(200)) is None
        assert check(_make_response(404)) is None
        assert check(_make_response(405)).status_code == 405
        assert check(_make_response(199)).status_code == 199

    def test_custom_range_rejects_missing_response(self):
        """Test that custom checks also reject a missing response"""
        assert isinstance(status_code_check(200, 200)(None), MissingResponseError)

    def test_checks_are_independent(self):
        """Test that each call builds its own check"""
        first = status_code_check(200, 200)
        second = status_code_check(300, 399)
        assert first is not second
        assert first(_make_response(301)) is not None
        assert second(_make_response(301)) is None

    @pytest.mark.parametrize("bounds", [(300, 200), (99, 200), (200, 600)])
    def test_invalid_range(self, bounds):
        """Test that empty or out-of-range bounds are rejected"""
        with pytest.raises(ValueError, match="Invalid status code range"):
            status_code_check(*bounds)
