"""Tests for the macro endpoints and apply-result decoding."""

import pytest

from conftest import BASE_URL, make_response
from zendesk_client.macros import MacroListOptions, parse_apply_result
from zendesk_client.models import Macro, MacroAction
from zendesk_client.monitoring import api_calls

MACRO_JSON = {
    "id": 25,
    "url": f"{BASE_URL}/macros/25.json",
    "title": "Close and redirect to topics",
    "active": True,
    "position": 1,
    "description": None,
    "restriction": None,
    "actions": [{"field": "status", "value": "solved"}],
    "created_at": "2024-01-05T10:00:00Z",
    "updated_at": "2024-01-05T10:00:00Z",
}


def apply_result(**ticket):
    return {"result": {"ticket": ticket}}


class TestGetMacros:

    def test_lists_macros_and_page(self, client, session):
        session.request.return_value = make_response({
            "macros": [MACRO_JSON, {**MACRO_JSON, "id": 26, "title": "Escalate"}],
            "next_page": f"{BASE_URL}/macros.json?page=2",
            "previous_page": None,
            "count": 3,
        })

        macros, page = client.get_macros()

        session.request.assert_called_once_with("GET", f"{BASE_URL}/macros.json", json=None, timeout=30.0)
        assert [m.id for m in macros] == [25, 26]
        assert macros[0].actions == [MacroAction(field="status", value=["solved"])]
        assert page.next_page == f"{BASE_URL}/macros.json?page=2"
        assert page.count == 3

    def test_encodes_options(self, client, session):
        session.request.return_value = make_response({"macros": [], "count": 0})

        client.get_macros(MacroListOptions(active=True, sort_by="alphabetical", per_page=100))

        url = session.request.call_args.args[1]
        assert url == f"{BASE_URL}/macros.json?per_page=100&active=true&sort_by=alphabetical"

    def test_get_all_macros_follows_next_page(self, client, session):
        session.request.side_effect = [
            make_response({"macros": [MACRO_JSON], "next_page": f"{BASE_URL}/macros.json?page=2", "count": 2}),
            make_response({"macros": [{**MACRO_JSON, "id": 26}], "next_page": None, "count": 2}),
        ]

        macros = client.get_all_macros()

        assert [m.id for m in macros] == [25, 26]
        second_url = session.request.call_args_list[1].args[1]
        assert second_url == f"{BASE_URL}/macros.json?page=2"
        assert api_calls["macros"] == 2


class TestMacroCrud:

    def test_get_macro(self, client, session):
        session.request.return_value = make_response({"macro": MACRO_JSON})

        macro = client.get_macro(25)

        session.request.assert_called_once_with("GET", f"{BASE_URL}/macros/25.json", json=None, timeout=30.0)
        assert macro.title == "Close and redirect to topics"

    def test_create_macro_sends_envelope(self, client, session):
        session.request.return_value = make_response({"macro": MACRO_JSON}, status_code=201)
        macro = Macro(title="Close and redirect to topics", actions=[MacroAction(field="status", value=["solved"])])

        created = client.create_macro(macro)

        session.request.assert_called_once_with(
            "POST",
            f"{BASE_URL}/macros.json",
            json={"macro": {
                "actions": [{"field": "status", "value": ["solved"]}],
                "active": True,
                "title": "Close and redirect to topics",
            }},
            timeout=30.0,
        )
        assert created.id == 25

    def test_update_macro(self, client, session):
        session.request.return_value = make_response({"macro": {**MACRO_JSON, "active": False}})

        updated = client.update_macro(25, Macro(title="Close and redirect to topics", active=False))

        method, url = session.request.call_args.args
        assert (method, url) == ("PUT", f"{BASE_URL}/macros/25.json")
        assert session.request.call_args.kwargs["json"]["macro"]["active"] is False
        assert updated.active is False

    def test_delete_macro(self, client, session):
        session.request.return_value = make_response(status_code=204)

        assert client.delete_macro(25) is None
        session.request.assert_called_once_with("DELETE", f"{BASE_URL}/macros/25.json", json=None, timeout=30.0)

    def test_response_without_envelope_raises(self, client, session):
        session.request.return_value = make_response({"error": "unexpected"})

        with pytest.raises(ValueError):
            client.get_macro(25)


class TestApplyMacro:

    def test_show_changes_to_ticket(self, client, session):
        session.request.return_value = make_response(apply_result(
            ticket_form_id="360000123",
            side_conversation={
                "subject": "Vendor follow-up",
                "message": "Please ship a replacement",
                "recipients": "vendor@example.com",
                "context_type": "email",
            },
            subject="Printer on fire",
            tags=["printer", "urgent"],
            comment={"body": "We are on it", "public": "true"},
            collaborator_ids=[1, 2],
            follower_ids=[3],
            status="solved",
            custom_fields=[{"id": 27642, "value": "745"}],
        ))

        ticket = client.show_changes_to_ticket(25)

        session.request.assert_called_once_with("GET", f"{BASE_URL}/macros/25/apply.json", json=None, timeout=30.0)
        assert ticket.ticket_form_id == 360000123
        assert ticket.comment.body == "We are on it"
        assert ticket.comment.public is True
        assert ticket.side_conversation.recipients == "vendor@example.com"
        assert ticket.tags == ["printer", "urgent"]
        assert ticket.collaborator_ids == [1, 2]
        assert ticket.follower_ids == [3]
        assert ticket.status == "solved"
        assert ticket.custom_fields[0].value == "745"
        assert api_calls["macro_apply"] == 1

    def test_show_ticket_after_changes(self, client, session):
        session.request.return_value = make_response(apply_result(
            id=35436,
            ticket_form_id=360000123,
            subject="Printer on fire",
            comment={"body": "Internal note", "public": "false"},
            status="pending",
        ))

        ticket = client.show_ticket_after_changes(35436, 25)

        session.request.assert_called_once_with(
            "GET", f"{BASE_URL}/tickets/35436/macros/25/apply", json=None, timeout=30.0
        )
        assert ticket.id == 35436
        assert ticket.ticket_form_id == 360000123
        assert ticket.comment.public is False
        assert ticket.status == "pending"

    def test_invalid_public_string_raises(self, client, session):
        session.request.return_value = make_response(apply_result(comment={"body": "x", "public": "maybe"}))

        with pytest.raises(ValueError):
            client.show_changes_to_ticket(25)

    def test_parse_apply_result_without_ticket_raises(self):
        with pytest.raises(ValueError, match="result.ticket"):
            parse_apply_result({"result": {}})
