import unittest

from gorgias_mcp import models
from gorgias_mcp.models import Listing, Paginated, Single, to_internal, to_wire

from helpers import TICKET

SAMPLES = {
    models.Account: {
        "domain": "acme",
        "status": {"active": True, "reason": None},
        "settings": [{"type": "business-hours", "data": {}}],
        "created_datetime": "2020-01-01T00:00:00+00:00",
        "deactivated_datetime": None,
    },
    models.Ticket: TICKET,
    models.TicketWithMessages: dict(TICKET, messages=[{"id": 5, "ticket_id": 101, "from_agent": True}]),
    models.Message: {
        "id": 5,
        "ticket_id": 101,
        "channel": "email",
        "via": "helpdesk",
        "from_agent": True,
        "sender": {"id": 4, "email": "agent@acme.com", "name": "Agent", "type": "user"},
        "receiver": {"id": 7, "email": "jane@example.com", "name": "Jane"},
        "body_text": "Hello",
        "stripped_text": "Hello",
        "attachments": [{"url": "https://files/x.png", "name": "x.png", "size": 10, "content_type": "image/png"}],
        "integrations": {"shopify": {"order": 1}},
        "macro_id": 2,
        "created_datetime": "2024-03-01T10:15:00+00:00",
        "sent_datetime": "2024-03-01T10:15:01+00:00",
    },
    models.Customer: {
        "id": 7,
        "email": "jane@example.com",
        "name": "Jane Doe",
        "firstname": "Jane",
        "lastname": "Doe",
        "language": "en",
        "data": {"vip": True},
        "channels": [{"id": 1, "type": "email", "address": "jane@example.com", "preferred": True}],
        "tickets_count": 3,
        "created_datetime": "2023-01-01T00:00:00+00:00",
    },
    models.User: {"id": 4, "email": "agent@acme.com", "role": {"id": 1, "name": "admin"}, "active": True},
    models.Team: {"id": 3, "name": "Support", "members": [{"id": 4, "email": "agent@acme.com", "name": "Agent"}]},
    models.Tag: {"id": 9, "name": "shipping", "decoration": {"color": "#f00"}, "usage": 12},
    models.Macro: {"id": 2, "name": "Close", "actions": [{"type": "setStatus", "args": {"status": "closed"}}]},
    models.Rule: {"id": 1, "name": "Auto tag", "code_ast": {"type": "Program"}, "event_types": "ticket-created"},
    models.Integration: {"id": 1, "name": "Hook", "type": "http", "http": {"url": "https://x", "method": "POST"}},
    models.View: {"id": 1, "name": "Mine", "order_by": "created_datetime", "order_dir": "desc", "fields": ["subject"]},
    models.SatisfactionSurvey: {"id": 1, "score": 5, "ticket_id": 101, "customer_id": 7, "scored_datetime": None},
    models.CustomField: {"id": 1, "object_type": "ticket", "label": "Reason", "definition": {"type": "dropdown"}},
    models.Event: {"id": 1, "type": "ticket-updated", "object_type": "Ticket", "object_id": 101, "user_id": 4},
    models.Job: {"id": 1, "type": "updateTickets", "status": "pending", "params": {"ids": [1]}},
    models.Widget: {"id": 1, "context": "ticket", "template": {"type": "wrapper"}, "integration_id": 1},
    models.Statistic: {"data": {"total": 3}, "meta": {"start_datetime": "2024-01-01", "end_datetime": "2024-01-31"}},
}


class TestNaming(unittest.TestCase):
    def test_round_trip_for_every_entity(self):
        for model, wire in SAMPLES.items():
            with self.subTest(model=model.__name__):
                internal = to_internal(model, wire)
                declared = set(model.model_fields)
                self.assertFalse([key for key in internal if "_" in key])

                restored = to_wire(model, internal)
                self.assertLessEqual(set(restored), set(wire) | declared)
                for key in set(wire) & declared:
                    self.assertIn(key, restored)
                    if not isinstance(wire[key], (dict, list)):
                        self.assertEqual(restored[key], wire[key])

    def test_internal_names_are_camel_case(self):
        internal = to_internal(models.Ticket, TICKET)
        self.assertEqual(internal["createdDatetime"], TICKET["created_datetime"])
        self.assertEqual(internal["messagesCount"], 2)
        self.assertEqual(internal["assigneeTeam"], {"id": 3, "name": "Support"})
        self.assertNotIn("created_datetime", internal)

    def test_explicit_renames(self):
        ticket = to_internal(models.Ticket, dict(TICKET, spam="spam", snooze_datetime="2024-04-01T00:00:00+00:00"))
        self.assertEqual(ticket["spamStatus"], "spam")
        self.assertEqual(ticket["snoozeUntilDatetime"], "2024-04-01T00:00:00+00:00")
        self.assertNotIn("spam", ticket)

        message = to_internal(models.Message, SAMPLES[models.Message])
        self.assertEqual(message["integrationsData"], {"shopify": {"order": 1}})

        wire = to_wire(models.Ticket, ticket)
        self.assertEqual(wire["spam"], "spam")
        self.assertEqual(wire["snooze_datetime"], "2024-04-01T00:00:00+00:00")

    def test_unknown_fields_are_dropped(self):
        internal = to_internal(models.Ticket, TICKET)
        self.assertNotIn("replyOptions", internal)
        self.assertEqual(internal["customer"], {"id": 7, "email": "jane@example.com", "name": "Jane Doe"})
        self.assertEqual(internal["tags"], [{"id": 9, "name": "shipping"}])

    def test_user_data_keys_are_kept(self):
        internal = to_internal(models.Customer, dict(SAMPLES[models.Customer], data={"loyalty_tier": "gold"}))
        self.assertEqual(internal["data"], {"loyalty_tier": "gold"})

    def test_party_type_is_optional(self):
        message = to_internal(models.Message, SAMPLES[models.Message])
        self.assertEqual(message["sender"]["type"], "user")
        self.assertIsNone(message["receiver"]["type"])


class TestResults(unittest.TestCase):
    def test_next_cursor_only_when_more(self):
        self.assertEqual(Paginated(items=[{"id": 1}], next_cursor="n").to_internal(), {"items": [{"id": 1}], "nextCursor": "n"})
        self.assertEqual(Paginated(items=[]).to_internal(), {"items": []})

    def test_listing_and_single(self):
        self.assertEqual(Listing(items=[{"id": 1}]).to_internal(), {"items": [{"id": 1}]})
        self.assertEqual(Single(item={"id": 1}).to_internal(), {"id": 1})


if __name__ == "__main__":
    unittest.main()
