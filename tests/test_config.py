from __future__ import annotations

from core.config import DEFAULT_SERVERCHAN_BASE_URL, ChannelConfig, RecordSchema
from core.filters import reminder_predicate, reset_predicate


def test_channel_config_treats_blank_values_as_absent() -> None:
    config = ChannelConfig.from_env({"TELEGRAM_URL": "   ", "SERVERCHAN_TOKEN": ""})
    assert config.telegram_url is None
    assert config.serverchan_token is None
    assert config.serverchan_base_url == DEFAULT_SERVERCHAN_BASE_URL


def test_channel_config_trims_values() -> None:
    config = ChannelConfig.from_env(
        {"TELEGRAM_URL": " https://host/bot1/sendMessage?chat_id=1 \n", "SERVERCHAN_TOKEN": " tok "},
        serverchan_base_url="https://push.example.com/",
    )
    assert config.telegram_url == "https://host/bot1/sendMessage?chat_id=1"
    assert config.serverchan_token == "tok"
    assert config.serverchan_base_url == "https://push.example.com"


def test_record_schema_overrides_only_given_keys() -> None:
    schema = RecordSchema.from_dict({"renewed_property": "是否已续费"})
    assert schema.renewed_property == "是否已续费"
    assert schema.status_property == "subscriptionStatus"


def test_predicates_select_opposite_flag_states() -> None:
    schema = RecordSchema()
    reset = {c.property: (c.kind, c.value) for c in reset_predicate(schema).conditions}
    remind = {c.property: (c.kind, c.value) for c in reminder_predicate(schema).conditions}

    assert reset["subscriptionStatus"] == ("status", "manually subscribing")
    assert reset["needsReminder"] == ("checkbox", False)
    assert reset["alreadyRenewed"] == ("checkbox", True)
    assert remind["needsReminder"] == ("checkbox", True)
    assert remind["alreadyRenewed"] == ("checkbox", False)
