from authdemo import response


def test_ok_has_no_error_field():
    assert response.ok().to_dict() == {"status": "OK"}


def test_error_carries_message():
    result = response.error("failed to decode request")
    assert result.status == response.STATUS_ERROR
    assert result.to_dict() == {"status": "Error", "error": "failed to decode request"}


def test_error_with_empty_message_omits_field():
    assert response.error("").to_dict() == {"status": "Error"}


def test_responses_compare_by_value():
    assert response.ok() == response.Response(status="OK")
    assert response.error("x") != response.error("y")