"""
Async Gorgias REST client, one instance per incoming request.

Every call classifies the upstream status before the body is read:
429 -> RateLimitError, 401/403 -> AuthenticationError, other non-2xx ->
GorgiasApiError, 204 -> None. Nothing is retried here.
"""

import base64
import logging
from typing import Any, Dict, List, Optional, Tuple, Type

import httpx

from gorgias_mcp.config import USER_AGENT, Settings
from gorgias_mcp.credentials import Credentials
from gorgias_mcp.errors import AuthenticationError, GorgiasApiError, RateLimitError
from gorgias_mcp.models import (
    Account,
    CustomerCreate,
    CustomerUpdate,
    CustomField,
    CustomFieldCreate,
    CustomFieldUpdate,
    Customer,
    Event,
    Integration,
    IntegrationCreate,
    IntegrationUpdate,
    Job,
    JobCreate,
    Listing,
    Macro,
    MacroCreate,
    MacroUpdate,
    Message,
    MessageCreate,
    MessageInput,
    Paginated,
    Rule,
    RuleCreate,
    RuleUpdate,
    SatisfactionSurvey,
    SatisfactionSurveyCreate,
    Single,
    Statistic,
    StatisticQuery,
    Tag,
    TagCreate,
    TagUpdate,
    Team,
    TeamCreate,
    TeamUpdate,
    Ticket,
    TicketCreate,
    TicketListParams,
    TicketUpdate,
    TicketWithMessages,
    User,
    View,
    ViewCreate,
    ViewUpdate,
    Widget,
    WidgetCreate,
    WidgetUpdate,
    WireModel,
    to_internal,
)

logger = logging.getLogger(__name__)

DEFAULT_RETRY_AFTER = 60
MAX_RETRY_AFTER = 3600
AUTH_FAILED_MESSAGE = "Authentication failed. Check your Gorgias credentials."


def normalize_page_params(
    limit: Optional[int], cursor: Optional[str], settings: Settings
) -> Tuple[int, Optional[str]]:
    """None or 0 means the default page size; anything else is clamped to [1, max]."""
    if not limit:
        return settings.default_page_size, cursor
    return max(1, min(limit, settings.max_page_size)), cursor


def parse_retry_after(value: Optional[str]) -> int:
    if value is None:
        return DEFAULT_RETRY_AFTER
    try:
        seconds = int(value.strip())
    except ValueError:
        return DEFAULT_RETRY_AFTER
    if seconds < 0:
        return DEFAULT_RETRY_AFTER
    return min(seconds, MAX_RETRY_AFTER)


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        message = body.get("message") or body.get("error")
        if isinstance(message, str) and message:
            return message
    return f"API error: {response.status_code}"


def classify_response(response: httpx.Response) -> Any:
    status = response.status_code
    if status == 429:
        retry_after = parse_retry_after(response.headers.get("Retry-After"))
        raise RateLimitError(f"Rate limit exceeded. Retry after {retry_after} seconds.", retry_after)
    if status in (401, 403):
        raise AuthenticationError(AUTH_FAILED_MESSAGE, status)
    if not response.is_success:
        raise GorgiasApiError(_error_message(response), status)
    if status == 204 or not response.content:
        return None
    return response.json()


def _drop_none(values: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in values.items() if v is not None}


def _ref(value: Optional[int]) -> Optional[Dict[str, int]]:
    # 0 and None both clear an assignment
    return {"id": value} if value else None


def _message_body(message: MessageInput) -> Dict[str, Any]:
    body = message.model_dump(exclude_none=True, exclude={"sender_id", "receiver_id"})
    if message.sender_id is not None:
        body["sender"] = {"id": message.sender_id}
    if message.receiver_id is not None:
        body["receiver"] = {"id": message.receiver_id}
    return body


class GorgiasClient:
    def __init__(
        self,
        credentials: Credentials,
        settings: Optional[Settings] = None,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings or Settings()
        self.base_url = f"https://{credentials.domain}.gorgias.com/api"
        token = base64.b64encode(f"{credentials.email}:{credentials.api_key}".encode()).decode()
        self._http = httpx.AsyncClient(
            base_url=self.base_url,
            headers={
                "Authorization": f"Basic {token}",
                "User-Agent": USER_AGENT,
                "Content-Type": "application/json",
            },
            transport=transport,
        )

    async def __aenter__(self) -> "GorgiasClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
    ) -> Any:
        logger.debug("Gorgias %s %s", method, path)
        response = await self._http.request(
            method,
            path,
            params=_drop_none(params) if params else None,
            json=json,
        )
        return classify_response(response)

    # --- shape helpers ---

    async def _paginated(
        self,
        path: str,
        model: Type[WireModel],
        limit: Optional[int] = None,
        cursor: Optional[str] = None,
        **filters: Any,
    ) -> Paginated:
        limit, cursor = normalize_page_params(limit, cursor, self.settings)
        body = await self._request("GET", path, params={"limit": limit, "cursor": cursor, **filters})
        body = body or {}
        items = [to_internal(model, item) for item in body.get("data") or []]
        meta = body.get("meta") or {}
        return Paginated(items=items, next_cursor=meta.get("next_cursor"))

    async def _listing(self, path: str, model: Type[WireModel], **filters: Any) -> Listing:
        body = await self._request("GET", path, params=filters or None)
        if isinstance(body, dict):
            body = body.get("data") or []
        return Listing(items=[to_internal(model, item) for item in body or []])

    async def _single(
        self, method: str, path: str, model: Type[WireModel], json: Any = None
    ) -> Single:
        body = await self._request(method, path, json=json)
        return Single(item=to_internal(model, body))

    async def _delete(self, path: str, json: Any = None) -> None:
        await self._request("DELETE", path, json=json)

    # --- account ---

    async def test_connection(self) -> Dict[str, Any]:
        try:
            await self._request("GET", "/users", params={"limit": 1})
        except Exception as e:
            logger.info("Gorgias connection test failed: %s", e)
            return {"connected": False, "message": str(e)}
        return {"connected": True, "message": "Successfully connected to Gorgias"}

    async def get_account(self) -> Single:
        return await self._single("GET", "/account", Account)

    async def get_statistic(self, name: str, query: StatisticQuery) -> Single:
        return await self._single(
            "POST", f"/stats/{name}", Statistic, json=query.model_dump(exclude_none=True)
        )

    # --- tickets ---

    async def list_tickets(self, params: TicketListParams) -> Paginated:
        filters = params.model_dump(exclude={"limit", "cursor", "tag_ids"})
        if params.tag_ids:
            filters["tag_ids"] = ",".join(str(t) for t in params.tag_ids)
        return await self._paginated("/tickets", Ticket, params.limit, params.cursor, **filters)

    async def get_ticket(self, ticket_id: int) -> Single:
        return await self._single("GET", f"/tickets/{ticket_id}", TicketWithMessages)

    async def create_ticket(self, data: TicketCreate) -> Single:
        if data.customer_id is not None:
            customer: Dict[str, Any] = {"id": data.customer_id}
        elif data.customer_email:
            customer = {"email": data.customer_email}
        else:
            raise ValueError("Either customer_id or customer_email must be provided")
        body = _drop_none({
            "channel": data.channel,
            "subject": data.subject,
            "customer": customer,
            "messages": [_message_body(m) for m in data.messages],
        })
        return await self._single("POST", "/tickets", Ticket, json=body)

    async def update_ticket(self, ticket_id: int, data: TicketUpdate) -> Single:
        body = data.model_dump(
            exclude_unset=True, exclude={"assignee_user_id", "assignee_team_id"}
        )
        body = _drop_none(body)
        if "assignee_user_id" in data.model_fields_set:
            body["assignee_user"] = _ref(data.assignee_user_id)
        if "assignee_team_id" in data.model_fields_set:
            body["assignee_team"] = _ref(data.assignee_team_id)
        return await self._single("PUT", f"/tickets/{ticket_id}", Ticket, json=body)

    async def delete_ticket(self, ticket_id: int) -> None:
        await self._delete(f"/tickets/{ticket_id}")

    async def add_ticket_tags(self, ticket_id: int, tag_ids: List[int]) -> None:
        await self._request(
            "POST", f"/tickets/{ticket_id}/tags", json={"tags": [{"id": t} for t in tag_ids]}
        )

    async def remove_ticket_tags(self, ticket_id: int, tag_ids: List[int]) -> None:
        await self._delete(f"/tickets/{ticket_id}/tags", json={"tags": [{"id": t} for t in tag_ids]})

    # --- messages ---

    async def list_messages(
        self, limit: Optional[int] = None, cursor: Optional[str] = None, ticket_id: Optional[int] = None
    ) -> Paginated:
        return await self._paginated("/messages", Message, limit, cursor, ticket_id=ticket_id)

    async def get_message(self, message_id: int) -> Single:
        return await self._single("GET", f"/messages/{message_id}", Message)

    async def create_message(self, data: MessageCreate) -> Single:
        return await self._single("POST", "/messages", Message, json=_message_body(data))

    async def delete_message(self, message_id: int) -> None:
        await self._delete(f"/messages/{message_id}")

    # --- customers ---

    async def list_customers(
        self, limit: Optional[int] = None, cursor: Optional[str] = None, email: Optional[str] = None
    ) -> Paginated:
        return await self._paginated("/customers", Customer, limit, cursor, email=email)

    async def get_customer(self, customer_id: int) -> Single:
        return await self._single("GET", f"/customers/{customer_id}", Customer)

    async def create_customer(self, data: CustomerCreate) -> Single:
        return await self._single("POST", "/customers", Customer, json=data.model_dump(exclude_none=True))

    async def update_customer(self, customer_id: int, data: CustomerUpdate) -> Single:
        return await self._single(
            "PUT", f"/customers/{customer_id}", Customer, json=data.model_dump(exclude_none=True)
        )

    async def delete_customer(self, customer_id: int) -> None:
        await self._delete(f"/customers/{customer_id}")

    async def merge_customers(self, target_id: int, source_id: int) -> Single:
        """Merge `source_id` into `target_id`; the target survives."""
        return await self._single(
            "PUT", f"/customers/{target_id}/merge", Customer, json={"customer_id": source_id}
        )

    # --- users ---

    async def list_users(self, limit: Optional[int] = None, cursor: Optional[str] = None) -> Paginated:
        return await self._paginated("/users", User, limit, cursor)

    async def get_user(self, user_id: int) -> Single:
        return await self._single("GET", f"/users/{user_id}", User)

    # --- teams ---

    @staticmethod
    def _team_body(data: TeamUpdate) -> Dict[str, Any]:
        body = data.model_dump(exclude_none=True, exclude={"member_ids"})
        if data.member_ids is not None:
            body["members"] = [{"id": m} for m in data.member_ids]
        return body

    async def list_teams(self) -> Listing:
        return await self._listing("/teams", Team)

    async def get_team(self, team_id: int) -> Single:
        return await self._single("GET", f"/teams/{team_id}", Team)

    async def create_team(self, data: TeamCreate) -> Single:
        return await self._single("POST", "/teams", Team, json=self._team_body(data))

    async def update_team(self, team_id: int, data: TeamUpdate) -> Single:
        return await self._single("PUT", f"/teams/{team_id}", Team, json=self._team_body(data))

    async def delete_team(self, team_id: int) -> None:
        await self._delete(f"/teams/{team_id}")

    # --- tags ---

    @staticmethod
    def _tag_body(data: TagUpdate) -> Dict[str, Any]:
        body = data.model_dump(exclude_none=True, exclude={"color"})
        if data.color is not None:
            body["decoration"] = {"color": data.color}
        return body

    async def list_tags(self) -> Listing:
        return await self._listing("/tags", Tag)

    async def get_tag(self, tag_id: int) -> Single:
        return await self._single("GET", f"/tags/{tag_id}", Tag)

    async def create_tag(self, data: TagCreate) -> Single:
        return await self._single("POST", "/tags", Tag, json=self._tag_body(data))

    async def update_tag(self, tag_id: int, data: TagUpdate) -> Single:
        return await self._single("PUT", f"/tags/{tag_id}", Tag, json=self._tag_body(data))

    async def delete_tag(self, tag_id: int) -> None:
        await self._delete(f"/tags/{tag_id}")

    async def merge_tags(self, target_id: int, source_ids: List[int]) -> Single:
        return await self._single(
            "PUT", "/tags/merge", Tag, json={"target_id": target_id, "source_ids": source_ids}
        )

    # --- macros ---

    async def list_macros(self, limit: Optional[int] = None, cursor: Optional[str] = None) -> Paginated:
        return await self._paginated("/macros", Macro, limit, cursor)

    async def get_macro(self, macro_id: int) -> Single:
        return await self._single("GET", f"/macros/{macro_id}", Macro)

    async def create_macro(self, data: MacroCreate) -> Single:
        return await self._single("POST", "/macros", Macro, json=data.model_dump(exclude_none=True))

    async def update_macro(self, macro_id: int, data: MacroUpdate) -> Single:
        return await self._single(
            "PUT", f"/macros/{macro_id}", Macro, json=data.model_dump(exclude_none=True)
        )

    async def delete_macro(self, macro_id: int) -> None:
        await self._delete(f"/macros/{macro_id}")

    # --- rules ---

    async def list_rules(self, limit: Optional[int] = None, cursor: Optional[str] = None) -> Paginated:
        return await self._paginated("/rules", Rule, limit, cursor)

    async def get_rule(self, rule_id: int) -> Single:
        return await self._single("GET", f"/rules/{rule_id}", Rule)

    async def create_rule(self, data: RuleCreate) -> Single:
        return await self._single("POST", "/rules", Rule, json=data.model_dump(exclude_none=True))

    async def update_rule(self, rule_id: int, data: RuleUpdate) -> Single:
        return await self._single("PUT", f"/rules/{rule_id}", Rule, json=data.model_dump(exclude_none=True))

    async def delete_rule(self, rule_id: int) -> None:
        await self._delete(f"/rules/{rule_id}")

    # --- integrations ---

    async def list_integrations(self) -> Listing:
        return await self._listing("/integrations", Integration)

    async def get_integration(self, integration_id: int) -> Single:
        return await self._single("GET", f"/integrations/{integration_id}", Integration)

    async def create_integration(self, data: IntegrationCreate) -> Single:
        return await self._single(
            "POST", "/integrations", Integration, json=data.model_dump(exclude_none=True)
        )

    async def update_integration(self, integration_id: int, data: IntegrationUpdate) -> Single:
        return await self._single(
            "PUT", f"/integrations/{integration_id}", Integration, json=data.model_dump(exclude_none=True)
        )

    async def delete_integration(self, integration_id: int) -> None:
        await self._delete(f"/integrations/{integration_id}")

    # --- views ---

    async def list_views(self) -> Listing:
        return await self._listing("/views", View)

    async def get_view(self, view_id: int) -> Single:
        return await self._single("GET", f"/views/{view_id}", View)

    async def create_view(self, data: ViewCreate) -> Single:
        return await self._single("POST", "/views", View, json=data.model_dump(exclude_none=True))

    async def update_view(self, view_id: int, data: ViewUpdate) -> Single:
        return await self._single("PUT", f"/views/{view_id}", View, json=data.model_dump(exclude_none=True))

    async def delete_view(self, view_id: int) -> None:
        await self._delete(f"/views/{view_id}")

    async def list_view_items(
        self, view_id: int, limit: Optional[int] = None, cursor: Optional[str] = None
    ) -> Paginated:
        return await self._paginated(f"/views/{view_id}/items", Ticket, limit, cursor)

    # --- satisfaction surveys ---

    async def list_satisfaction_surveys(
        self,
        limit: Optional[int] = None,
        cursor: Optional[str] = None,
        ticket_id: Optional[int] = None,
        customer_id: Optional[int] = None,
    ) -> Paginated:
        return await self._paginated(
            "/satisfaction-surveys", SatisfactionSurvey, limit, cursor,
            ticket_id=ticket_id, customer_id=customer_id,
        )

    async def get_satisfaction_survey(self, survey_id: int) -> Single:
        return await self._single("GET", f"/satisfaction-surveys/{survey_id}", SatisfactionSurvey)

    async def create_satisfaction_survey(self, data: SatisfactionSurveyCreate) -> Single:
        return await self._single(
            "POST", "/satisfaction-surveys", SatisfactionSurvey, json=data.model_dump(exclude_none=True)
        )

    # --- custom fields ---

    async def list_custom_fields(self, object_type: Optional[str] = None) -> Listing:
        return await self._listing("/custom-fields", CustomField, **_drop_none({"object_type": object_type}))

    async def get_custom_field(self, field_id: int) -> Single:
        return await self._single("GET", f"/custom-fields/{field_id}", CustomField)

    async def create_custom_field(self, data: CustomFieldCreate) -> Single:
        return await self._single(
            "POST", "/custom-fields", CustomField, json=data.model_dump(exclude_none=True)
        )

    async def update_custom_field(self, field_id: int, data: CustomFieldUpdate) -> Single:
        return await self._single(
            "PUT", f"/custom-fields/{field_id}", CustomField, json=data.model_dump(exclude_none=True)
        )

    # --- events ---

    async def list_events(
        self,
        limit: Optional[int] = None,
        cursor: Optional[str] = None,
        object_type: Optional[str] = None,
        object_id: Optional[int] = None,
        type: Optional[str] = None,
    ) -> Paginated:
        return await self._paginated(
            "/events", Event, limit, cursor, object_type=object_type, object_id=object_id, type=type
        )

    async def get_event(self, event_id: int) -> Single:
        return await self._single("GET", f"/events/{event_id}", Event)

    # --- jobs ---

    async def list_jobs(self, limit: Optional[int] = None, cursor: Optional[str] = None) -> Paginated:
        return await self._paginated("/jobs", Job, limit, cursor)

    async def get_job(self, job_id: int) -> Single:
        return await self._single("GET", f"/jobs/{job_id}", Job)

    async def create_job(self, data: JobCreate) -> Single:
        return await self._single("POST", "/jobs", Job, json=data.model_dump(exclude_none=True))

    async def cancel_job(self, job_id: int) -> None:
        await self._delete(f"/jobs/{job_id}")

    # --- widgets ---

    async def list_widgets(self) -> Listing:
        return await self._listing("/widgets", Widget)

    async def get_widget(self, widget_id: int) -> Single:
        return await self._single("GET", f"/widgets/{widget_id}", Widget)

    async def create_widget(self, data: WidgetCreate) -> Single:
        return await self._single("POST", "/widgets", Widget, json=data.model_dump(exclude_none=True))

    async def update_widget(self, widget_id: int, data: WidgetUpdate) -> Single:
        return await self._single(
            "PUT", f"/widgets/{widget_id}", Widget, json=data.model_dump(exclude_none=True)
        )

    async def delete_widget(self, widget_id: int) -> None:
        await self._delete(f"/widgets/{widget_id}")
