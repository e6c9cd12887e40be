"""
Finance Tracker API Client

DESIGN DECISION: This client is a thin, typed gateway. Every public method:
1. Picks an HTTP method and a path
2. Serializes a typed input model (if any)
3. Makes exactly ONE request through `request()`
4. Parses the JSON response into a model

There is NO business logic, retrying, caching or request coalescing here.
Failures surface immediately as ApiError subclasses; presentation and retry
policy belong to the caller.

The base URL is decided once by the hosting application (see
ApiSettings.resolve_base_url) and passed in at construction.
"""

from typing import Any, Optional, TypeVar
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from finance_tracker.client.errors import (
    ApiResponseError,
    ApiTransportError,
)
from finance_tracker.config import get_settings
from finance_tracker.diagnostics import get_logger
from finance_tracker.models import (
    ApiInput,
    ApiRecord,
    Bill,
    BillInput,
    DeleteResult,
    FinancedExpense,
    FinancedExpenseInput,
    FinancedExpensePayment,
    MarkPaidInput,
    Member,
    MemberCreate,
    Mortgage,
    MortgageInput,
    MortgagePayment,
    MortgagePaymentInput,
    Payment,
    PaymentInput,
    PaymentUpdate,
    RecurringBill,
    RecurringBillInput,
)


GENERIC_NETWORK_ERROR = "Network error"
DEFAULT_HEADERS = {"Content-Type": "application/json"}

RecordT = TypeVar("RecordT", bound=ApiRecord)

logger = get_logger(__name__)


def _segment(value: str) -> str:
    """Escape an id for use as a single path segment."""
    return quote(str(value), safe="")


class FinanceApiClient:
    """
    Async client for the finance tracker REST API.

    Usage:
        async with FinanceApiClient("http://localhost:8080") as client:
            members = await client.get_members()

    Calls made concurrently are independent; they share only the
    underlying connection pool.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        headers: Optional[dict[str, str]] = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: API origin, e.g. 'http://localhost:8080'. '/api' is added per call.
            timeout: Seconds before a request is abandoned. None waits indefinitely.
            transport: Custom httpx transport (tests pass httpx.MockTransport).
            headers: Extra headers sent with every request.
        """
        if not base_url or not base_url.strip():
            raise ValueError("base_url is required")

        self._base_url = base_url.strip().rstrip("/")
        self._default_headers = {**DEFAULT_HEADERS, **(headers or {})}
        self._http = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            transport=transport,
        )

    @classmethod
    def from_settings(
        cls,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "FinanceApiClient":
        """Build a client from FINANCE_API_* configuration."""
        api_settings = get_settings().api
        base_url = api_settings.resolve_base_url()
        logger.info("api_client_configured", base_url=base_url)
        return cls(
            base_url,
            timeout=api_settings.timeout_seconds,
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    async def aclose(self) -> None:
        """Release pooled connections."""
        await self._http.aclose()

    async def __aenter__(self) -> "FinanceApiClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    # =========================================================================
    # CORE REQUEST
    # =========================================================================

    async def request(
        self,
        endpoint: str,
        method: str = "GET",
        json: Any = None,
        headers: Optional[dict[str, str]] = None,
    ) -> Any:
        """
        Make one request to `{base_url}/api{endpoint}` and return the JSON body.

        The body is returned exactly as parsed; it is not validated.

        Raises:
            ApiResponseError: Non-2xx status. Message is the body's `error`
                field, "Network error" if the body is not JSON, or
                "HTTP {status}: {reason}".
            ApiTransportError: The request failed before a response arrived,
                or a success response was not JSON.
        """
        _, data = await self._exchange(endpoint, method, json, headers)
        return data

    async def _exchange(
        self,
        endpoint: str,
        method: str = "GET",
        json: Any = None,
        headers: Optional[dict[str, str]] = None,
    ) -> tuple[int, Any]:
        """Send one request; return the success status code and decoded body."""
        url = f"{self._base_url}/api{endpoint}"
        merged_headers = {**self._default_headers, **(headers or {})}

        try:
            response = await self._http.request(
                method,
                url,
                json=json,
                headers=merged_headers,
            )
        except httpx.RequestError as e:
            logger.warning(
                "api_request_failed",
                method=method,
                endpoint=endpoint,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise ApiTransportError(
                f"{GENERIC_NETWORK_ERROR}: {e}" if str(e) else GENERIC_NETWORK_ERROR,
                method=method,
                url=url,
            ) from e

        if not response.is_success:
            raise self._response_error(response, method, url, endpoint)

        try:
            data = response.json()
        except ValueError as e:
            logger.warning(
                "api_response_not_json",
                method=method,
                endpoint=endpoint,
                status_code=response.status_code,
            )
            raise ApiTransportError(
                f"Invalid JSON in response from {method} {endpoint}",
                method=method,
                url=url,
                status_code=response.status_code,
            ) from e

        logger.debug(
            "api_request_completed",
            method=method,
            endpoint=endpoint,
            status_code=response.status_code,
        )
        return response.status_code, data

    def _response_error(
        self,
        response: httpx.Response,
        method: str,
        url: str,
        endpoint: str,
    ) -> ApiResponseError:
        """Build the error for a non-2xx response."""
        try:
            body = response.json()
        except ValueError:
            body = {"error": GENERIC_NETWORK_ERROR}

        server_message = body.get("error") if isinstance(body, dict) else None
        message = (
            str(server_message)
            if server_message
            else f"HTTP {response.status_code}: {response.reason_phrase}"
        )

        logger.warning(
            "api_request_rejected",
            method=method,
            endpoint=endpoint,
            status_code=response.status_code,
            error=message,
        )
        return ApiResponseError(
            message,
            status_code=response.status_code,
            status_text=response.reason_phrase,
            body=body,
            method=method,
            url=url,
        )

    def _parse(
        self,
        data: Any,
        model: type[RecordT],
        method: str,
        endpoint: str,
        status_code: int,
    ) -> RecordT:
        """Validate a success body; a wrong shape is reported like a non-JSON body."""
        try:
            return model.model_validate(data)
        except ValidationError as e:
            logger.warning(
                "api_response_invalid",
                method=method,
                endpoint=endpoint,
                status_code=status_code,
                model=model.__name__,
                error_count=e.error_count(),
            )
            raise ApiTransportError(
                f"Unexpected {model.__name__} in response from {method} {endpoint}",
                method=method,
                url=f"{self._base_url}/api{endpoint}",
                status_code=status_code,
            ) from e

    async def _get_one(self, endpoint: str, model: type[RecordT]) -> RecordT:
        status_code, data = await self._exchange(endpoint)
        return self._parse(data, model, "GET", endpoint, status_code)

    async def _get_list(self, endpoint: str, model: type[RecordT]) -> list[RecordT]:
        status_code, data = await self._exchange(endpoint)
        if not isinstance(data, list):
            logger.warning(
                "api_response_invalid",
                method="GET",
                endpoint=endpoint,
                status_code=status_code,
                model=model.__name__,
            )
            raise ApiTransportError(
                f"Expected a list of {model.__name__} in response from GET {endpoint}",
                method="GET",
                url=f"{self._base_url}/api{endpoint}",
                status_code=status_code,
            )
        return [self._parse(item, model, "GET", endpoint, status_code) for item in data]

    async def _send(
        self,
        endpoint: str,
        method: str,
        model: type[RecordT],
        payload: Optional[ApiInput] = None,
    ) -> RecordT:
        body = payload.to_wire() if payload is not None else None
        status_code, data = await self._exchange(endpoint, method, body)
        return self._parse(data, model, method, endpoint, status_code)

    async def _delete(self, endpoint: str) -> DeleteResult:
        status_code, data = await self._exchange(endpoint, "DELETE")
        return self._parse(data, DeleteResult, "DELETE", endpoint, status_code)

    # =========================================================================
    # MEMBERS
    # =========================================================================

    async def get_members(self) -> list[Member]:
        return await self._get_list("/members", Member)

    async def create_member(self, payload: MemberCreate) -> Member:
        return await self._send("/members", "POST", Member, payload)

    async def delete_member(self, member_id: str) -> DeleteResult:
        return await self._delete(f"/members/{_segment(member_id)}")

    # =========================================================================
    # BILLS
    # =========================================================================

    async def get_bills(self) -> list[Bill]:
        """All bills with their splits and payments."""
        return await self._get_list("/bills", Bill)

    async def create_bill(self, payload: BillInput) -> Bill:
        return await self._send("/bills", "POST", Bill, payload)

    async def update_bill(self, bill_id: str, payload: BillInput) -> Bill:
        """Replace a bill's fields and splits."""
        return await self._send(f"/bills/{_segment(bill_id)}", "PUT", Bill, payload)

    async def delete_bill(self, bill_id: str) -> DeleteResult:
        return await self._delete(f"/bills/{_segment(bill_id)}")

    # =========================================================================
    # BILL PAYMENTS
    # =========================================================================

    async def create_payment(self, payload: PaymentInput) -> Payment:
        return await self._send("/payments", "POST", Payment, payload)

    async def update_payment(self, payment_id: str, payload: PaymentUpdate) -> Payment:
        return await self._send(f"/payments/{_segment(payment_id)}", "PUT", Payment, payload)

    async def delete_payment(self, payment_id: str) -> DeleteResult:
        return await self._delete(f"/payments/{_segment(payment_id)}")

    # =========================================================================
    # RECURRING BILLS
    # =========================================================================

    async def get_recurring_bills(self) -> list[RecurringBill]:
        return await self._get_list("/recurring-bills", RecurringBill)

    async def create_recurring_bill(self, payload: RecurringBillInput) -> RecurringBill:
        return await self._send("/recurring-bills", "POST", RecurringBill, payload)

    async def update_recurring_bill(
        self,
        recurring_bill_id: str,
        payload: RecurringBillInput,
    ) -> RecurringBill:
        return await self._send(
            f"/recurring-bills/{_segment(recurring_bill_id)}", "PUT", RecurringBill, payload
        )

    async def delete_recurring_bill(self, recurring_bill_id: str) -> DeleteResult:
        return await self._delete(f"/recurring-bills/{_segment(recurring_bill_id)}")

    # =========================================================================
    # MORTGAGES
    # =========================================================================

    async def get_mortgages(self) -> list[Mortgage]:
        return await self._get_list("/mortgages", Mortgage)

    async def create_mortgage(self, payload: MortgageInput) -> Mortgage:
        return await self._send("/mortgages", "POST", Mortgage, payload)

    async def update_mortgage(self, mortgage_id: str, payload: MortgageInput) -> Mortgage:
        return await self._send(f"/mortgages/{_segment(mortgage_id)}", "PUT", Mortgage, payload)

    async def delete_mortgage(self, mortgage_id: str) -> DeleteResult:
        return await self._delete(f"/mortgages/{_segment(mortgage_id)}")

    async def create_mortgage_payment(self, payload: MortgagePaymentInput) -> MortgagePayment:
        return await self._send("/mortgage-payments", "POST", MortgagePayment, payload)

    async def update_mortgage_payment(
        self,
        payment_id: str,
        payload: MortgagePaymentInput,
    ) -> MortgagePayment:
        return await self._send(
            f"/mortgage-payments/{_segment(payment_id)}", "PUT", MortgagePayment, payload
        )

    async def delete_mortgage_payment(self, payment_id: str) -> DeleteResult:
        return await self._delete(f"/mortgage-payments/{_segment(payment_id)}")

    # =========================================================================
    # FINANCED EXPENSES
    # =========================================================================

    async def get_financed_expenses(self) -> list[FinancedExpense]:
        return await self._get_list("/financed-expenses", FinancedExpense)

    async def get_financed_expense(self, expense_id: str) -> FinancedExpense:
        """One financed expense, including its installment schedule."""
        return await self._get_one(f"/financed-expenses/{_segment(expense_id)}", FinancedExpense)

    async def create_financed_expense(self, payload: FinancedExpenseInput) -> FinancedExpense:
        return await self._send("/financed-expenses", "POST", FinancedExpense, payload)

    async def update_financed_expense(
        self,
        expense_id: str,
        payload: FinancedExpenseInput,
    ) -> FinancedExpense:
        return await self._send(
            f"/financed-expenses/{_segment(expense_id)}", "PUT", FinancedExpense, payload
        )

    async def delete_financed_expense(self, expense_id: str) -> DeleteResult:
        return await self._delete(f"/financed-expenses/{_segment(expense_id)}")

    async def get_financed_expense_payments(
        self,
        expense_id: str,
    ) -> list[FinancedExpensePayment]:
        """The installment schedule generated by the server."""
        return await self._get_list(
            f"/financed-expenses/{_segment(expense_id)}/payments", FinancedExpensePayment
        )

    async def mark_financed_expense_payment_paid(
        self,
        expense_id: str,
        payment_id: str,
        payload: MarkPaidInput,
    ) -> FinancedExpensePayment:
        """
        Mark one installment paid on payload.paid_date.

        Marking an already-paid installment is rejected by the server
        (ApiResponseError, 400).
        """
        return await self._send(
            f"/financed-expenses/{_segment(expense_id)}/payments/{_segment(payment_id)}/mark-paid",
            "POST",
            FinancedExpensePayment,
            payload,
        )

    async def unmark_financed_expense_payment_paid(
        self,
        expense_id: str,
        payment_id: str,
    ) -> FinancedExpensePayment:
        return await self._send(
            f"/financed-expenses/{_segment(expense_id)}/payments/{_segment(payment_id)}/unmark-paid",
            "POST",
            FinancedExpensePayment,
        )

    # =========================================================================
    # SERVICE
    # =========================================================================

    async def get_health(self) -> dict[str, Any]:
        """Liveness check: {'status': 'ok', 'timestamp': ...}."""
        return await self.request("/health")

    async def get_app_settings(self) -> dict[str, str]:
        """Server-side key/value settings."""
        return await self.request("/settings")

    async def update_app_setting(self, key: str, value: str) -> dict[str, Any]:
        """Create or replace one server-side setting."""
        return await self.request(
            f"/settings/{_segment(key)}",
            method="PUT",
            json={"value": value},
        )
