"""
Gorgias entities in two shapes.

Attribute names are the wire names (snake_case, as the API sends them); the
internal shape is the camelCase alias produced on ``model_dump(by_alias=True)``.
Mapping is done fresh for every response, nothing here is cached.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Literal, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        validate_by_name=True,
        validate_by_alias=True,
        extra="ignore",
    )


M = TypeVar("M", bound=WireModel)


def to_internal(model: Type[M], wire: Dict[str, Any]) -> Dict[str, Any]:
    """Map one wire record to its internal (camelCase) shape."""
    return model.model_validate(wire).model_dump(by_alias=True, mode="json")


def to_wire(model: Type[M], internal: Dict[str, Any]) -> Dict[str, Any]:
    """Inverse of `to_internal`: restore the wire field names."""
    return model.model_validate(internal).model_dump(mode="json")


# --- reference stubs ---

class CustomerRef(WireModel):
    id: int
    email: Optional[str] = None
    name: Optional[str] = None


class UserRef(WireModel):
    id: int
    email: Optional[str] = None
    name: Optional[str] = None


class TeamRef(WireModel):
    id: int
    name: Optional[str] = None


class TagRef(WireModel):
    id: int
    name: Optional[str] = None


class Party(WireModel):
    """Sender or receiver of a message."""
    id: int
    email: Optional[str] = None
    name: Optional[str] = None
    type: Optional[Literal["customer", "user"]] = None


# --- entities ---

class Account(WireModel):
    domain: str
    status: Optional[Dict[str, Any]] = None
    settings: List[Dict[str, Any]] = Field(default_factory=list)
    created_datetime: Optional[str] = None
    deactivated_datetime: Optional[str] = None


class Attachment(WireModel):
    url: str
    name: Optional[str] = None
    size: Optional[int] = None
    content_type: Optional[str] = None


class Message(WireModel):
    id: int
    ticket_id: Optional[int] = None
    channel: Optional[str] = None
    via: Optional[str] = None
    from_agent: bool = False
    sender: Optional[Party] = None
    receiver: Optional[Party] = None
    subject: Optional[str] = None
    body_text: Optional[str] = None
    body_html: Optional[str] = None
    stripped_text: Optional[str] = None
    stripped_html: Optional[str] = None
    public_html: Optional[str] = None
    attachments: List[Attachment] = Field(default_factory=list)
    actions: Optional[List[Dict[str, Any]]] = None
    headers: Optional[Dict[str, Any]] = None
    macro_id: Optional[int] = None
    rule_id: Optional[int] = None
    integrations: Optional[Dict[str, Any]] = Field(None, alias="integrationsData")
    created_datetime: Optional[str] = None
    sent_datetime: Optional[str] = None
    failed_datetime: Optional[str] = None
    opened_datetime: Optional[str] = None
    uri: Optional[str] = None


class Ticket(WireModel):
    id: int
    external_id: Optional[str] = None
    subject: Optional[str] = None
    status: Optional[str] = None
    priority: Optional[str] = None
    channel: Optional[str] = None
    via: Optional[str] = None
    from_agent: Optional[bool] = None
    customer: Optional[CustomerRef] = None
    assignee_user: Optional[UserRef] = None
    assignee_team: Optional[TeamRef] = None
    messages_count: Optional[int] = None
    is_unread: Optional[bool] = None
    spam: Optional[str] = Field(None, alias="spamStatus")
    created_datetime: Optional[str] = None
    updated_datetime: Optional[str] = None
    opened_datetime: Optional[str] = None
    closed_datetime: Optional[str] = None
    last_received_message_datetime: Optional[str] = None
    last_message_datetime: Optional[str] = None
    snooze_datetime: Optional[str] = Field(None, alias="snoozeUntilDatetime")
    tags: List[TagRef] = Field(default_factory=list)
    uri: Optional[str] = None


class TicketWithMessages(Ticket):
    messages: List[Message] = Field(default_factory=list)


class Channel(WireModel):
    id: Optional[int] = None
    type: str
    address: str
    preferred: Optional[bool] = None
    created_datetime: Optional[str] = None


class Customer(WireModel):
    id: int
    external_id: Optional[str] = None
    email: Optional[str] = None
    name: Optional[str] = None
    firstname: Optional[str] = None
    lastname: Optional[str] = None
    note: Optional[str] = None
    language: Optional[str] = None
    timezone: Optional[str] = None
    data: Optional[Dict[str, Any]] = None
    channels: List[Channel] = Field(default_factory=list)
    integrations: Optional[Dict[str, Any]] = None
    meta: Optional[Dict[str, Any]] = None
    tickets_count: Optional[int] = None
    created_datetime: Optional[str] = None
    updated_datetime: Optional[str] = None
    uri: Optional[str] = None


class User(WireModel):
    id: int
    external_id: Optional[str] = None
    email: Optional[str] = None
    name: Optional[str] = None
    firstname: Optional[str] = None
    lastname: Optional[str] = None
    role: Optional[Dict[str, Any]] = None
    bio: Optional[str] = None
    active: Optional[bool] = None
    timezone: Optional[str] = None
    language: Optional[str] = None
    country: Optional[str] = None
    meta: Optional[Dict[str, Any]] = None
    created_datetime: Optional[str] = None
    updated_datetime: Optional[str] = None
    uri: Optional[str] = None


class Team(WireModel):
    id: int
    name: str
    description: Optional[str] = None
    decoration: Optional[Dict[str, Any]] = None
    members: List[UserRef] = Field(default_factory=list)
    created_datetime: Optional[str] = None
    uri: Optional[str] = None


class Tag(WireModel):
    id: int
    name: str
    description: Optional[str] = None
    decoration: Optional[Dict[str, Any]] = None
    usage: Optional[int] = None
    created_datetime: Optional[str] = None
    deleted_datetime: Optional[str] = None
    uri: Optional[str] = None


class Macro(WireModel):
    id: int
    external_id: Optional[str] = None
    name: str
    intent: Optional[str] = None
    language: Optional[str] = None
    usage: Optional[int] = None
    actions: List[Dict[str, Any]] = Field(default_factory=list)
    created_datetime: Optional[str] = None
    updated_datetime: Optional[str] = None
    archived_datetime: Optional[str] = None
    uri: Optional[str] = None


class Rule(WireModel):
    id: int
    name: str
    description: Optional[str] = None
    code: Optional[str] = None
    code_ast: Optional[Dict[str, Any]] = None
    event_types: Optional[str] = None
    priority: Optional[int] = None
    created_datetime: Optional[str] = None
    updated_datetime: Optional[str] = None
    deactivated_datetime: Optional[str] = None
    uri: Optional[str] = None


class Integration(WireModel):
    id: int
    name: str
    type: str
    http: Optional[Dict[str, Any]] = None
    created_datetime: Optional[str] = None
    updated_datetime: Optional[str] = None
    managed: Optional[bool] = None
    business_hours_id: Optional[int] = None
    uri: Optional[str] = None


class View(WireModel):
    id: int
    name: str
    slug: Optional[str] = None
    filters: Optional[str] = None
    order_by: Optional[str] = None
    order_dir: Optional[str] = None
    visibility: Optional[str] = None
    fields: Optional[List[str]] = None
    decoration: Optional[Dict[str, Any]] = None
    created_datetime: Optional[str] = None
    updated_datetime: Optional[str] = None
    uri: Optional[str] = None


class SatisfactionSurvey(WireModel):
    id: int
    score: Optional[int] = None
    body_text: Optional[str] = None
    customer_id: Optional[int] = None
    ticket_id: Optional[int] = None
    meta: Optional[Dict[str, Any]] = None
    created_datetime: Optional[str] = None
    sent_datetime: Optional[str] = None
    scored_datetime: Optional[str] = None
    should_send_datetime: Optional[str] = None
    uri: Optional[str] = None


class CustomField(WireModel):
    id: int
    external_id: Optional[str] = None
    object_type: str
    label: str
    description: Optional[str] = None
    priority: Optional[int] = None
    required: Optional[bool] = None
    managed_type: Optional[str] = None
    definition: Optional[Dict[str, Any]] = None
    created_datetime: Optional[str] = None
    updated_datetime: Optional[str] = None
    deactivated_datetime: Optional[str] = None
    uri: Optional[str] = None


class Event(WireModel):
    id: int
    context: Optional[str] = None
    type: str
    object_id: Optional[int] = None
    object_type: Optional[str] = None
    user_id: Optional[int] = None
    data: Optional[Dict[str, Any]] = None
    created_datetime: Optional[str] = None
    uri: Optional[str] = None


class Job(WireModel):
    id: int
    type: str
    status: Optional[str] = None
    params: Optional[Dict[str, Any]] = None
    info: Optional[Dict[str, Any]] = None
    scheduled_datetime: Optional[str] = None
    completed_datetime: Optional[str] = None
    created_datetime: Optional[str] = None
    updated_datetime: Optional[str] = None
    uri: Optional[str] = None


class Widget(WireModel):
    id: int
    context: str
    template: Optional[Any] = None
    order: Optional[int] = None
    integration_id: Optional[int] = None
    app_id: Optional[int] = None
    created_datetime: Optional[str] = None
    updated_datetime: Optional[str] = None
    uri: Optional[str] = None


class StatisticMeta(WireModel):
    start_datetime: Optional[str] = None
    end_datetime: Optional[str] = None
    previous_start_datetime: Optional[str] = None
    previous_end_datetime: Optional[str] = None


class Statistic(WireModel):
    data: Any = None
    meta: Optional[StatisticMeta] = None


# --- inputs ---
# Field names are the wire names; unset fields never reach the request body.

TicketStatus = Literal["open", "closed"]
TicketPriority = Literal["low", "normal", "high", "urgent"]
TicketOrderBy = Literal[
    "created_datetime",
    "updated_datetime",
    "last_message_datetime",
    "last_received_message_datetime",
]
ObjectType = Literal["ticket", "customer"]
WidgetContext = Literal["ticket", "customer", "user"]
Visibility = Literal["public", "shared", "private"]
OrderDir = Literal["asc", "desc"]


class TicketListParams(BaseModel):
    limit: Optional[int] = None
    cursor: Optional[str] = None
    status: Optional[TicketStatus] = None
    channel: Optional[str] = None
    assignee_user_id: Optional[int] = None
    assignee_team_id: Optional[int] = None
    customer_id: Optional[int] = None
    tag_ids: Optional[List[int]] = None
    created_datetime_after: Optional[str] = None
    created_datetime_before: Optional[str] = None
    updated_datetime_after: Optional[str] = None
    updated_datetime_before: Optional[str] = None
    order_by: Optional[TicketOrderBy] = None


class MessageInput(BaseModel):
    channel: str
    via: str = "api"
    body_text: Optional[str] = None
    body_html: Optional[str] = None
    from_agent: bool = False
    sender_id: Optional[int] = None
    receiver_id: Optional[int] = None
    subject: Optional[str] = None


class MessageCreate(MessageInput):
    ticket_id: int
    via: str = "helpdesk"
    from_agent: bool = True


class TicketCreate(BaseModel):
    channel: str
    customer_id: Optional[int] = None
    customer_email: Optional[str] = None
    subject: Optional[str] = None
    messages: List[MessageInput]


class TicketUpdate(BaseModel):
    """Only explicitly set fields are sent; an assignee of None or 0 unassigns."""
    status: Optional[TicketStatus] = None
    priority: Optional[TicketPriority] = None
    assignee_user_id: Optional[int] = None
    assignee_team_id: Optional[int] = None
    snooze_datetime: Optional[str] = None


class ChannelInput(BaseModel):
    type: str
    address: str
    preferred: Optional[bool] = None


class CustomerUpdate(BaseModel):
    email: Optional[str] = None
    name: Optional[str] = None
    firstname: Optional[str] = None
    lastname: Optional[str] = None
    external_id: Optional[str] = None
    note: Optional[str] = None
    language: Optional[str] = None
    timezone: Optional[str] = None
    data: Optional[Dict[str, Any]] = None


class CustomerCreate(CustomerUpdate):
    channels: Optional[List[ChannelInput]] = None


class TeamUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    decoration: Optional[Dict[str, Any]] = None
    member_ids: Optional[List[int]] = None


class TeamCreate(TeamUpdate):
    name: str


class TagUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    color: Optional[str] = None


class TagCreate(TagUpdate):
    name: str


class MacroAction(BaseModel):
    model_config = ConfigDict(extra="allow")

    type: str
    args: Dict[str, Any] = Field(default_factory=dict)


class MacroUpdate(BaseModel):
    name: Optional[str] = None
    actions: Optional[List[MacroAction]] = None
    intent: Optional[str] = None
    language: Optional[str] = None


class MacroCreate(MacroUpdate):
    name: str
    actions: List[MacroAction]


class RuleUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    code: Optional[str] = None
    code_ast: Optional[Dict[str, Any]] = None
    event_types: Optional[str] = None
    priority: Optional[int] = None


class RuleCreate(RuleUpdate):
    name: str
    event_types: str


class HttpConfig(BaseModel):
    url: str
    method: str = "POST"
    headers: Dict[str, str] = Field(default_factory=dict)
    triggers: Dict[str, Any] = Field(default_factory=dict)


class IntegrationUpdate(BaseModel):
    name: Optional[str] = None
    type: Optional[str] = None
    http: Optional[HttpConfig] = None


class IntegrationCreate(IntegrationUpdate):
    name: str
    type: str


class ViewUpdate(BaseModel):
    name: Optional[str] = None
    filters: Optional[str] = None
    order_by: Optional[str] = None
    order_dir: Optional[OrderDir] = None
    visibility: Optional[Visibility] = None
    fields: Optional[List[str]] = None
    decoration: Optional[Dict[str, Any]] = None


class ViewCreate(ViewUpdate):
    name: str


class SatisfactionSurveyCreate(BaseModel):
    ticket_id: int
    customer_id: int
    should_send_datetime: Optional[str] = None


class CustomFieldChoice(BaseModel):
    value: str
    label: str


class CustomFieldDefinition(BaseModel):
    type: str
    choices: Optional[List[CustomFieldChoice]] = None


class CustomFieldUpdate(BaseModel):
    label: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[int] = None
    required: Optional[bool] = None
    definition: Optional[CustomFieldDefinition] = None


class CustomFieldCreate(CustomFieldUpdate):
    object_type: ObjectType
    label: str
    definition: CustomFieldDefinition


class JobCreate(BaseModel):
    type: str
    params: Dict[str, Any]
    scheduled_datetime: Optional[str] = None


class WidgetUpdate(BaseModel):
    context: Optional[WidgetContext] = None
    template: Optional[Any] = None
    order: Optional[int] = None
    integration_id: Optional[int] = None


class WidgetCreate(WidgetUpdate):
    context: WidgetContext
    template: Any


class StatisticQuery(BaseModel):
    start_datetime: str
    end_datetime: str
    timezone: Optional[str] = None


# --- tool results ---

@dataclass
class Paginated:
    """One page of a cursor-paginated listing. No `next_cursor` means end of stream."""
    items: List[Dict[str, Any]]
    next_cursor: Optional[str] = None

    def to_internal(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"items": self.items}
        if self.next_cursor:
            out["nextCursor"] = self.next_cursor
        return out


@dataclass
class Listing:
    """A complete, unpaginated collection."""
    items: List[Dict[str, Any]]

    def to_internal(self) -> Dict[str, Any]:
        return {"items": self.items}


@dataclass
class Single:
    item: Any

    def to_internal(self) -> Any:
        return self.item
