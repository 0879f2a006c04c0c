import pytest

from dsfapi.httpcommands import (
    AddUserSession,
    HttpEndpointCommand,
    HttpResponseType,
    ReceivedHttpRequest,
    RemoveUserSession,
    SendHttpResponse,
    add_http_endpoint,
    remove_http_endpoint,
)
from dsfapi.records import AccessLevel, HttpEndpointType, SessionType


def test_add_http_endpoint_command_name_and_fields():
    cmd = add_http_endpoint(HttpEndpointType.POST, "my-plugin", "upload")
    assert cmd.command == "AddHttpEndpoint"
    assert cmd.to_dict() == {
        "Command": "AddHttpEndpoint",
        "EndpointType": "POST",
        "Namespace": "my-plugin",
        "Path": "upload",
    }


def test_remove_http_endpoint_command_name():
    cmd = remove_http_endpoint(HttpEndpointType.WEB_SOCKET, "ns", "sock")
    assert isinstance(cmd, HttpEndpointCommand)
    assert cmd.command == "RemoveHttpEndpoint"
    assert cmd.to_dict()["EndpointType"] == "WebSocket"


def test_received_http_request_defaults():
    request = ReceivedHttpRequest()
    assert request.session_id == 0
    assert request.queries == {}
    assert request.body == ""


def test_received_http_request_from_dict_case_insensitive():
    request = ReceivedHttpRequest.from_dict(
        {
            "sessionId": -1,
            "queries": {"a": "1"},
            "HEADERS": {"Accept": "text/plain"},
            "contentType": "text/plain",
            "body": "hello",
        }
    )
    assert request.session_id == -1
    assert request.queries == {"a": "1"}
    assert request.headers == {"Accept": "text/plain"}
    assert request.content_type == "text/plain"
    assert request.body == "hello"


def test_received_http_request_missing_fields():
    request = ReceivedHttpRequest.from_dict({"Body": "x"})
    assert request.body == "x"
    assert request.headers == {}


def test_http_response_type_values():
    assert HttpResponseType("statuscode") is HttpResponseType.STATUS_CODE
    assert str(HttpResponseType.PLAIN_TEXT) == "plaintext"


def test_send_http_response_to_dict():
    response = SendHttpResponse(500, "No event handler registered", HttpResponseType.STATUS_CODE)
    assert response.to_dict() == {
        "StatusCode": 500,
        "Response": "No event handler registered",
        "ResponseType": "statuscode",
    }


@pytest.mark.parametrize("code", [-1, 65536])
def test_send_http_response_rejects_out_of_range_status(code):
    with pytest.raises(ValueError):
        SendHttpResponse(code, "", HttpResponseType.JSON)


def test_add_user_session_to_dict():
    cmd = AddUserSession(AccessLevel.READ_WRITE, SessionType.HTTP, "10.0.0.5", 8080)
    assert cmd.command == "AddUserSession"
    assert cmd.to_dict() == {
        "Command": "AddUserSession",
        "AccessLevel": "readWrite",
        "SessionType": "http",
        "Origin": "10.0.0.5",
        "OriginPort": 8080,
    }


def test_remove_user_session_to_dict():
    cmd = RemoveUserSession(7)
    assert cmd.command == "RemoveUserSession"
    assert cmd.to_dict() == {"Command": "RemoveUserSession", "Id": 7}