import json

import pytest

from lib.contracts.slack_message import Attachment, AttachmentField, SlackResponse

ATTACHMENT_ORDER = [
    "fallback",
    "color",
    "pretext",
    "author_name",
    "author_link",
    "author_icon",
    "title",
    "title_link",
    "text",
    "fields",
    "image_url",
    "thumb_url",
    "footer",
    "footer_icon",
    "ts",
]


def test_empty_attachment_serialises_to_empty_object():
    assert Attachment().to_payload() == {}
    assert Attachment().to_json() == "{}"


def test_null_fields_are_omitted_and_order_is_fixed():
    # assigned out of order on purpose
    att = Attachment(ts=1500000000, title="t", color="#36a64f", footer="f")
    att.fallback = "fb"
    assert list(att.to_payload()) == ["fallback", "color", "title", "footer", "ts"]


def test_all_known_fields_in_declared_order():
    values = {name: name for name in ATTACHMENT_ORDER}
    values["fields"] = [{"title": "a", "value": "b", "short": True}]
    values["ts"] = 1
    payload = Attachment.from_payload(dict(reversed(list(values.items())))).to_payload()
    assert list(payload) == ATTACHMENT_ORDER


def test_additional_properties_follow_known_fields_in_insertion_order():
    att = Attachment(title="hello")
    att.set_additional_property("mrkdwn_in", ["text"])
    att.set_additional_property("callback_id", "cb")
    att.color = "red"
    payload = att.to_payload()
    assert list(payload) == ["color", "title", "mrkdwn_in", "callback_id"]
    assert att.additional_properties == {"mrkdwn_in": ["text"], "callback_id": "cb"}


def test_setting_known_name_through_additional_property_assigns_field():
    att = Attachment()
    att.set_additional_property("footer", "x")
    assert att.footer == "x"
    assert att.additional_properties == {}


def test_unknown_input_properties_are_preserved_verbatim():
    raw = {
        "zeta": {"nested": [1, 2, {"deep": None}]},
        "title": "t",
        "alpha": None,
        "color": "not-a-colour",
    }
    att = Attachment.from_payload(raw)
    assert att.title == "t"
    assert att.color == "not-a-colour"
    assert att.additional_properties == {
        "zeta": {"nested": [1, 2, {"deep": None}]},
        "alpha": None,
    }
    out = att.to_payload()
    assert list(out) == ["color", "title", "zeta", "alpha"]
    assert out["zeta"] == raw["zeta"]
    assert out["alpha"] is None


def test_response_round_trip():
    raw = {
        "response_type": "in_channel",
        "text": "Here you go",
        "attachments": [
            {
                "color": "#36a64f",
                "fields": [{"title": "Humidity", "value": "81 %", "short": True, "x": 1}],
                "footer": "Generated by Surprise service",
                "ts": 1700000000,
                "unfurl": False,
            },
            {"text": "second"},
        ],
        "replace_original": True,
    }
    resp = SlackResponse.from_json(json.dumps(raw))
    assert isinstance(resp.attachments[0], Attachment)
    assert isinstance(resp.attachments[0].fields[0], AttachmentField)
    assert resp.attachments[0].fields[0].additional_properties == {"x": 1}
    assert resp.attachments[1].text == "second"
    assert resp.additional_properties == {"replace_original": True}
    assert resp.to_payload() == raw
    assert SlackResponse.from_json(resp.to_json()) == resp


def test_response_key_order():
    resp = SlackResponse(attachments=[Attachment(text="a")], text="t", response_type="in_channel")
    resp.set_additional_property("thread_ts", "1.2")
    assert list(resp.to_payload()) == ["response_type", "text", "attachments", "thread_ts"]


def test_attachment_order_is_kept():
    resp = SlackResponse(attachments=[Attachment(text=str(i)) for i in range(5)])
    assert [a["text"] for a in resp.to_payload()["attachments"]] == ["0", "1", "2", "3", "4"]


def test_equality_ignores_extras_order():
    a = Attachment.from_payload({"x": 1, "y": 2, "title": "t"})
    b = Attachment.from_payload({"title": "t", "y": 2, "x": 1})
    assert a == b
    assert a != Attachment.from_payload({"title": "t", "x": 1})


@pytest.mark.parametrize("name", ["_meta", "__private", "copy", "json", "dict", "schema", "model_config"])
def test_additional_property_names_clashing_with_model_attributes_are_kept(name):
    att = Attachment(title="t")
    att.set_additional_property(name, 1)
    assert att.additional_properties == {name: 1}
    assert att.to_payload() == {"title": "t", name: 1}


def test_set_and_load_agree_on_underscore_names():
    att = Attachment()
    att.set_additional_property("_meta", {"a": 1})
    assert att == Attachment.from_payload({"_meta": {"a": 1}})


def test_off_type_values_are_accepted():
    att = Attachment.from_payload({"color": 123, "ts": 1.5, "title": 4.25})
    assert att.color == "123"
    assert att.ts == 1
    assert att.title == "4.25"
    field = AttachmentField.from_payload({"title": "Humidity", "value": 81})
    assert field.value == "81"
