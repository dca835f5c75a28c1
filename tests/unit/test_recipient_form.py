"""
Tests for recipient info validation and form state
"""
import pytest
from pydantic import ValidationError

from marketplace.client.recipient_form import RecipientInfoForm
from marketplace.schemas.recipient import RecipientInfo

VALID = {
    "recipient_name": "Amina Yusuf",
    "recipient_phone": "+1 (555) 123-4567",
    "recipient_national_id": "AB-12345",
}


def _messages(**overrides):
    data = {**VALID, **overrides}
    try:
        RecipientInfo(**data)
    except ValidationError as e:
        return [err["msg"] for err in e.errors()]
    return []


# ============================================
# RecipientInfo rules
# ============================================

def test_valid_recipient():
    info = RecipientInfo(**VALID)
    assert info.recipient_phone == "+1 (555) 123-4567"


def test_recipient_accepts_camel_case():
    info = RecipientInfo.model_validate({
        "recipientName": "Amina Yusuf",
        "recipientPhone": "5551234567",
        "recipientNationalId": "12345",
    })
    assert info.recipient_national_id == "12345"


@pytest.mark.parametrize("overrides,message", [
    ({"recipient_name": ""}, "Recipient name is required."),
    ({"recipient_phone": "555-1234"}, "Phone number must be at least 10 digits."),
    ({"recipient_phone": "555 123 456x"}, "Please enter a valid phone number format."),
    ({"recipient_phone": "1+5551234567"}, "Please enter a valid phone number format."),
    ({"recipient_national_id": "AB12"}, "National ID must be at least 5 characters."),
    ({"recipient_national_id": "A" * 21}, "National ID must be no more than 20 characters."),
    ({"recipient_national_id": "AB_12345"}, "National ID can only contain letters, numbers, hyphens, and spaces."),
])
def test_recipient_rules(overrides, message):
    assert _messages(**overrides) == [message]


def test_national_id_boundaries():
    assert _messages(recipient_national_id="A1234") == []
    assert _messages(recipient_national_id="A" * 20) == []


# ============================================
# RecipientInfoForm
# ============================================

def test_new_form_hides_errors_until_touched():
    form = RecipientInfoForm(on_submit=lambda info: None)

    assert form.is_valid is False
    assert form.can_submit is False
    assert form.errors == {}


def test_form_live_validation():
    form = RecipientInfoForm(on_submit=lambda info: None)

    form.set("recipient_phone", "123")
    assert form.error_for("recipient_phone") == "Phone number must be at least 10 digits."

    form.set("recipient_phone", "1234567890")
    assert form.error_for("recipient_phone") is None
    assert "recipient_name" not in form.errors


def test_form_submit_passes_recipient_info():
    submitted = []
    form = RecipientInfoForm(on_submit=submitted.append)

    for field, value in VALID.items():
        form.set(field, value)

    assert form.can_submit is True
    assert form.submit() is True
    assert submitted == [RecipientInfo(**VALID)]
    assert form.is_submitting is False


def test_invalid_form_submit_reveals_all_errors():
    submitted = []
    form = RecipientInfoForm(on_submit=submitted.append)
    form.set("recipient_name", "Amina")

    assert form.submit() is False
    assert submitted == []
    assert set(form.errors) == {"recipient_phone", "recipient_national_id"}


def test_form_back_works_while_invalid():
    went_back = []
    form = RecipientInfoForm(on_submit=lambda info: None, on_back=lambda: went_back.append(True))
    form.set("recipient_phone", "bad")

    assert form.can_go_back is True
    assert form.back() is True
    assert went_back == [True]


def test_form_without_back_callback():
    form = RecipientInfoForm(on_submit=lambda info: None)

    assert form.can_go_back is False
    assert form.back() is False


def test_form_blocks_actions_while_submitting():
    form = RecipientInfoForm(on_submit=lambda info: None, on_back=lambda: None, initial=VALID)
    seen = {}

    def on_submit(info):
        seen["can_submit"] = form.can_submit
        seen["can_go_back"] = form.can_go_back

    form.on_submit = on_submit
    form.submit()

    assert seen == {"can_submit": False, "can_go_back": False}


def test_form_rejects_unknown_field():
    form = RecipientInfoForm(on_submit=lambda info: None)

    with pytest.raises(KeyError):
        form.set("recipient_email", "a@example.com")
