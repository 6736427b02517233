"""Unit tests for bearer token lookup."""

from accountkit_token.auth.lookup import TokenRequest, lookup, parse_oauth2_token


class TestParseOAuth2Token:
    """Test Authorization header parsing."""

    def test_canonical_header(self):
        request = TokenRequest(headers={"Authorization": "Bearer abc123"})
        assert parse_oauth2_token(request) == "abc123"

    def test_lower_case_header(self):
        request = TokenRequest(headers={"authorization": "Bearer abc123"})
        assert parse_oauth2_token(request) == "abc123"

    def test_non_bearer_scheme(self):
        request = TokenRequest(headers={"Authorization": "Basic dXNlcjpwYXNz"})
        assert parse_oauth2_token(request) is None

    def test_missing_header(self):
        assert parse_oauth2_token(TokenRequest()) is None

    def test_empty_bearer_value(self):
        request = TokenRequest(headers={"Authorization": "Bearer "})
        assert parse_oauth2_token(request) is None


class TestLookup:
    """Test field lookup priority across request parts."""

    def test_body_wins(self):
        request = TokenRequest(
            body={"access_token": "from-body"},
            query={"access_token": "from-query"},
            headers={"access_token": "from-header", "Authorization": "Bearer from-bearer"},
        )
        assert lookup(request, "access_token") == "from-body"

    def test_query_before_headers(self):
        request = TokenRequest(
            query={"access_token": "from-query"},
            headers={"access_token": "from-header", "Authorization": "Bearer from-bearer"},
        )
        assert lookup(request, "access_token") == "from-query"

    def test_header_field_before_authorization(self):
        request = TokenRequest(
            headers={"access_token": "from-header", "Authorization": "Bearer from-bearer"},
        )
        assert lookup(request, "access_token") == "from-header"

    def test_header_field_case_insensitive(self):
        request = TokenRequest(headers={"Access_Token": "from-header"})
        assert lookup(request, "ACCESS_TOKEN") == "from-header"

    def test_authorization_fallback(self):
        request = TokenRequest(headers={"Authorization": "Bearer abc123"})
        assert lookup(request, "access_token") == "abc123"

    def test_falsy_body_value_is_skipped(self):
        request = TokenRequest(body={"access_token": ""}, query={"access_token": "from-query"})
        assert lookup(request, "access_token") == "from-query"

    def test_non_string_values_are_not_tokens(self):
        request = TokenRequest(
            body={"access_token": 12345},
            query={"access_token": ["a", "b"]},
            headers={"Authorization": "Bearer from-bearer"},
        )
        assert lookup(request, "access_token") == "from-bearer"

    def test_non_string_body_value_only(self):
        request = TokenRequest(body={"access_token": {"nested": "tok"}})
        assert lookup(request, "access_token") is None

    def test_custom_field_name(self):
        request = TokenRequest(body={"ak_token": "custom"})
        assert lookup(request, "ak_token") == "custom"
        assert lookup(request, "access_token") is None

    def test_nothing_found(self):
        request = TokenRequest(body={}, query={}, headers={"Accept": "application/json"})
        assert lookup(request, "access_token") is None

    def test_bearer_also_answers_refresh_field(self):
        request = TokenRequest(headers={"Authorization": "Bearer abc123"})
        assert lookup(request, "refresh_token") == "abc123"


class TestTokenRequest:
    def test_headers_normalized(self):
        request = TokenRequest(headers={"X-Custom": "1"})
        assert request.headers == {"x-custom": "1"}

    def test_original_defaults_to_view(self):
        request = TokenRequest()
        assert request.original is request

    def test_original_returns_raw(self):
        raw = object()
        request = TokenRequest(raw=raw)
        assert request.original is raw
