import unittest
from unittest.mock import Mock, patch

import requests

from server_manager.dashboard.client import UpdateRequestError, UpdateServiceClient


def _response(status_code, payload=None):
    resp = Mock()
    resp.status_code = status_code
    resp.ok = 200 <= status_code < 400
    if payload is None:
        resp.json.side_effect = ValueError("no json")
    else:
        resp.json.return_value = payload
    return resp


class TestUpdateServiceClient(unittest.TestCase):

    def setUp(self):
        self.client = UpdateServiceClient("http://localhost:3001/")

    def test_base_url_trailing_slash_stripped(self):
        self.assertEqual(self.client.base_url, "http://localhost:3001")

    def test_trigger_update_success(self):
        payload = {"success": True, "message": "System updated successfully", "details": "X"}
        with patch.object(self.client.session, "post", return_value=_response(200, payload)) as post:
            data = self.client.trigger_update()
        self.assertEqual(data["details"], "X")
        post.assert_called_once_with("http://localhost:3001/update", timeout=None)

    def test_trigger_update_server_failure_uses_message(self):
        payload = {"success": False, "message": "Update failed", "error": "exit code 1"}
        with patch.object(self.client.session, "post", return_value=_response(500, payload)):
            with self.assertRaises(UpdateRequestError) as ctx:
                self.client.trigger_update()
        self.assertEqual(ctx.exception.message, "Update failed")
        self.assertEqual(ctx.exception.status_code, 500)
        self.assertEqual(ctx.exception.payload["error"], "exit code 1")

    def test_trigger_update_non_json_failure(self):
        with patch.object(self.client.session, "post", return_value=_response(502)):
            with self.assertRaises(UpdateRequestError) as ctx:
                self.client.trigger_update()
        self.assertEqual(ctx.exception.message, "Update failed")

    def test_trigger_update_failure_with_list_body(self):
        with patch.object(self.client.session, "post", return_value=_response(502, ["Bad Gateway"])):
            with self.assertRaises(UpdateRequestError) as ctx:
                self.client.trigger_update()
        self.assertEqual(ctx.exception.message, "Update failed")
        self.assertEqual(ctx.exception.status_code, 502)
        self.assertEqual(ctx.exception.payload, {})

    def test_trigger_update_ok_status_without_json_is_failure(self):
        with patch.object(self.client.session, "post", return_value=_response(200)):
            with self.assertRaises(UpdateRequestError) as ctx:
                self.client.trigger_update()
        self.assertEqual(ctx.exception.message, "Update failed")
        self.assertEqual(ctx.exception.status_code, 200)

    def test_trigger_update_ok_status_without_success_flag_is_failure(self):
        for body in ({"message": "accepted"}, {"success": False, "message": "Update failed"}, "OK"):
            with patch.object(self.client.session, "post", return_value=_response(200, body)):
                with self.assertRaises(UpdateRequestError):
                    self.client.trigger_update()

    def test_trigger_update_transport_failure(self):
        error = requests.exceptions.ConnectionError("Connection refused")
        with patch.object(self.client.session, "post", side_effect=error):
            with self.assertRaises(UpdateRequestError) as ctx:
                self.client.trigger_update()
        self.assertIn("Connection refused", ctx.exception.message)
        self.assertIsNone(ctx.exception.status_code)

    def test_health(self):
        resp = _response(200, {"status": "healthy"})
        with patch.object(self.client.session, "get", return_value=resp) as get:
            self.assertEqual(self.client.health(), {"status": "healthy"})
        get.assert_called_once_with("http://localhost:3001/health", timeout=None)


if __name__ == "__main__":
    unittest.main()
