import pytest
from contact.models import ContactMessage
from contact.services import set_read
from rest_framework.test import APIClient

URL = "/api/v1/contact/"

FORM = {
    "name": "  Ana Pérez ",
    "email": "Ana@Example.COM",
    "province": "Mendoza",
    "subject": "Consulta",
    "message": " ¿Tienen stock? ",
    "captcha_answer": "7",
}


@pytest.mark.django_db
def test_contact_message_created():
    resp = APIClient().post(URL, FORM, format="json")

    assert resp.status_code == 201
    body = resp.json()
    assert body["message"].startswith("Mensaje enviado correctamente")
    assert "captcha_answer" not in body["data"]
    msg = ContactMessage.objects.get()
    assert msg.name == "Ana Pérez"
    assert msg.email == "ana@example.com"
    assert msg.message == "¿Tienen stock?"
    assert msg.is_read is False


@pytest.mark.django_db
@pytest.mark.parametrize("missing", ["name", "email", "message", "captcha_answer"])
def test_contact_required_fields(missing):
    form = {k: v for k, v in FORM.items() if k != missing}
    resp = APIClient().post(URL, form, format="json")
    assert resp.status_code == 400
    assert missing in resp.json()
    assert ContactMessage.objects.count() == 0


@pytest.mark.django_db
def test_contact_rejects_bad_email_and_blank_captcha():
    resp = APIClient().post(URL, {**FORM, "email": "nope", "captcha_answer": " "}, format="json")
    assert resp.status_code == 400
    assert set(resp.json()) == {"email", "captcha_answer"}


@pytest.mark.django_db
def test_set_read_toggles_flag():
    APIClient().post(URL, FORM, format="json")
    assert set_read(ContactMessage.objects.all(), True) == 1
    assert ContactMessage.objects.get().is_read is True
