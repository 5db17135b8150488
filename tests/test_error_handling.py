"""
Back Office Ledger - Error Handling Tests
"""

from app.utils.error_handling import (
    AggregationTimeoutException,
    AuthenticationException,
    BusinessRuleException,
    ErrorCode,
    IncompletePayoutDataError,
    InvalidDateRangeException,
    NotFoundException,
    TokenInvalidException,
    ValidationException,
)


class TestAppExceptions:
    """Exception payloads rendered into the error envelope."""

    def test_not_found_message(self):
        exc = NotFoundException("Client", 42)

        assert exc.status_code == 404
        assert exc.message == "Client with ID '42' not found"
        assert exc.to_dict() == {
            "success": False,
            "statusCode": 404,
            "message": "Client with ID '42' not found",
            "error": "NOT_FOUND",
            "details": {"resource_type": "Client", "resource_id": "42"},
        }

    def test_not_found_without_id(self):
        assert NotFoundException("Influencer").message == "Influencer not found"

    def test_validation_field_is_reported(self):
        exc = ValidationException("Month must be between 1 and 12, got 0", field="month")

        body = exc.to_dict()
        assert body["statusCode"] == 400
        assert body["error"] == "VALIDATION_ERROR"
        assert body["details"]["field"] == "month"

    def test_invalid_date_range(self):
        exc = InvalidDateRangeException("2026-10-31T00:00:00", "2026-10-01T00:00:00")

        assert exc.status_code == 400
        assert exc.code == ErrorCode.INVALID_DATE_RANGE

    def test_business_rule(self):
        exc = BusinessRuleException("Monthly payout is only available for MONTHLY staff", rule="MONTHLY_STAFF_ONLY")

        assert exc.status_code == 400
        assert exc.details == {"violated_rule": "MONTHLY_STAFF_ONLY"}

    def test_aggregation_timeout(self):
        exc = AggregationTimeoutException("Account summary", 2.5)

        assert exc.status_code == 504
        assert exc.message == "Account summary did not complete within 2.5 seconds"
        assert exc.to_dict()["error"] == "AGGREGATION_TIMEOUT"

    def test_incomplete_payout_data(self):
        exc = IncompletePayoutDataError(7, 3, ["quantity"])

        assert exc.status_code == 500
        assert exc.staff_work_id == 7
        assert exc.message == "Staff work 7 is missing quantity"
        assert exc.details == {"staffWorkId": 7, "staffId": 3, "missing": ["quantity"]}

    def test_authentication_challenge(self):
        exc = AuthenticationException("Not authenticated")

        assert exc.status_code == 401
        assert exc.code == ErrorCode.UNAUTHORIZED
        assert exc.headers == {"WWW-Authenticate": "Bearer"}

    def test_token_invalid(self):
        exc = TokenInvalidException()

        assert exc.status_code == 401
        assert exc.to_dict()["error"] == "TOKEN_INVALID"
        assert exc.message == "Invalid or expired token"
        assert exc.headers == {"WWW-Authenticate": "Bearer"}
