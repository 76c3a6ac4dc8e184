from http import HTTPStatus

from rest_framework.exceptions import NotFound
from rest_framework.test import APIRequestFactory
from rest_framework.views import APIView

from conference.utils.exceptions import api_exception_handler


class BrokenView(APIView):
    pass


def context():
    request = APIRequestFactory().get("/")
    return {"view": BrokenView(), "request": request}


def test_api_errors_keep_default_rendering():
    response = api_exception_handler(NotFound(), context())
    assert response.status_code == HTTPStatus.NOT_FOUND


def test_unexpected_error_becomes_json_500(settings, caplog):
    settings.DEBUG = False
    response = api_exception_handler(RuntimeError("boom"), context())
    assert response.status_code == HTTPStatus.INTERNAL_SERVER_ERROR
    assert response.data == {"detail": "Internal server error"}
    assert "Unhandled error in BrokenView" in caplog.text


def test_debug_adds_error_text(settings):
    settings.DEBUG = True
    response = api_exception_handler(RuntimeError("boom"), context())
    assert response.data == {"detail": "Internal server error", "error": "boom"}
