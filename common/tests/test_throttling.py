import pytest
from common.sessions import get_session_id
from common.throttling import StoreScopedRateThrottle
from django.core.cache import cache
from rest_framework.test import APIClient, APIRequestFactory
from rest_framework.views import APIView


def test_session_id_is_stripped_and_blank_is_none():
    factory = APIRequestFactory()
    assert get_session_id(factory.get("/", HTTP_X_SESSION_ID="  abc ")) == "abc"
    assert get_session_id(factory.get("/", HTTP_X_SESSION_ID="   ")) is None
    assert get_session_id(factory.get("/")) is None


def test_throttle_identifies_by_session():
    throttle = StoreScopedRateThrottle()
    request = APIView().initialize_request(APIRequestFactory().get("/", HTTP_X_SESSION_ID="sess-9"))
    assert throttle.get_ident(request) == "session:sess-9"


@pytest.mark.django_db
def test_shipping_throttle_applies_per_session(settings):
    cache.clear()
    rf = {**settings.REST_FRAMEWORK}
    rf["DEFAULT_THROTTLE_RATES"] = {**rf["DEFAULT_THROTTLE_RATES"], "shipping": "2/min"}
    settings.REST_FRAMEWORK = rf
    client = APIClient()

    codes = [client.get("/api/v1/shipping/zones/", HTTP_X_SESSION_ID="s-1").status_code for _ in range(3)]
    other = client.get("/api/v1/shipping/zones/", HTTP_X_SESSION_ID="s-2").status_code

    assert codes == [200, 200, 429]
    assert other == 200
    cache.clear()
