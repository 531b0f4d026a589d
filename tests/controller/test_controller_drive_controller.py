import io
import json
import unittest
from unittest.mock import Mock, patch

from gdriveupdate.controller.drive_controller import (
    GoogleDriveController,
    _close_http_connections,
    _file_dict_to_update_result,
)
from gdriveupdate.errors import (
    NetworkError,
    NotFoundError,
    RateLimitError,
    TransferTimeoutError,
)
from gdriveupdate.models import MetadataPatch
from gdriveupdate.plan import ParentDelta
from gdriveupdate.stream import CancellationToken


def _http_error(status: int, reason: str, message: str = "err"):
    from googleapiclient.errors import HttpError

    resp = Mock()
    resp.status = status
    resp.reason = reason
    body = {"error": {"message": message, "errors": [{"reason": reason}]}}
    return HttpError(resp=resp, content=json.dumps(body).encode("utf-8"))


class TestDriveControllerHelpers(unittest.TestCase):
    def test_file_dict_to_update_result(self) -> None:
        data = {
            "id": "F1",
            "name": "n.txt",
            "mimeType": "text/plain",
            "parents": ["P1", "P2"],
            "size": "123",
            "md5Checksum": "abc",
        }
        result = _file_dict_to_update_result(data)
        self.assertEqual(result.file_id, "F1")
        self.assertEqual(result.parents, ["P1", "P2"])
        self.assertEqual(result.size, 123)
        self.assertEqual(result.md5_checksum, "abc")

    def test_file_dict_without_size(self) -> None:
        result = _file_dict_to_update_result({"id": "F1"})
        self.assertIsNone(result.size)
        self.assertEqual(result.parents, [])

    def test_close_http_connections(self) -> None:
        conn = Mock()
        inner = Mock()
        inner.connections = {"https:www.googleapis.com": conn}
        authorized = Mock()
        authorized.http = inner

        _close_http_connections(authorized)

        conn.close.assert_called_once_with()

    def test_close_http_connections_tolerates_missing_http(self) -> None:
        _close_http_connections(None)


class TestDriveControllerMocked(unittest.TestCase):
    def setUp(self) -> None:
        self.service = Mock()
        self.files_resource = Mock()
        self.req = Mock()
        self.service.files.return_value = self.files_resource
        self.files_resource.get.return_value = self.req
        self.files_resource.update.return_value = self.req
        self.controller = GoogleDriveController.from_service(self.service)

    def test_get_parents(self) -> None:
        self.req.execute.return_value = {"parents": ["B", "C"]}

        parents = self.controller.get_parents("F1")

        self.assertEqual(parents, {"B", "C"})
        kwargs = self.files_resource.get.call_args.kwargs
        self.assertEqual(kwargs["fileId"], "F1")
        self.assertEqual(kwargs["fields"], "parents")
        self.assertTrue(kwargs["supportsAllDrives"])

    def test_get_parents_of_parentless_file(self) -> None:
        self.req.execute.return_value = {}
        self.assertEqual(self.controller.get_parents("F1"), set())

    def test_update_metadata_only(self) -> None:
        self.req.execute.return_value = {"id": "F1", "parents": ["P"]}

        result = self.controller.update("F1", MetadataPatch(description="d"))

        self.assertEqual(result.file_id, "F1")
        kwargs = self.files_resource.update.call_args.kwargs
        self.assertEqual(kwargs["fileId"], "F1")
        self.assertEqual(kwargs["body"], {"description": "d"})
        self.assertNotIn("media_body", kwargs)
        self.assertNotIn("addParents", kwargs)
        self.assertNotIn("removeParents", kwargs)
        self.assertEqual(self.files_resource.update.call_count, 1)

    def test_update_with_parent_delta(self) -> None:
        self.req.execute.return_value = {"id": "F1", "parents": ["A", "B"]}
        delta = ParentDelta(to_remove=frozenset({"C"}), to_add=frozenset({"A"}))

        self.controller.update("F1", MetadataPatch(), parent_delta=delta)

        kwargs = self.files_resource.update.call_args.kwargs
        self.assertEqual(kwargs["addParents"], "A")
        self.assertEqual(kwargs["removeParents"], "C")

    def test_update_with_empty_delta_sends_no_parent_params(self) -> None:
        self.req.execute.return_value = {"id": "F1"}

        self.controller.update("F1", MetadataPatch(), parent_delta=ParentDelta())

        kwargs = self.files_resource.update.call_args.kwargs
        self.assertNotIn("addParents", kwargs)
        self.assertNotIn("removeParents", kwargs)

    def test_update_with_media_drives_chunks(self) -> None:
        status = Mock(resumable_progress=4, total_size=8)
        self.req.next_chunk.side_effect = [
            (status, None),
            (None, {"id": "F1", "size": "8"}),
        ]

        result = self.controller.update(
            "F1",
            MetadataPatch(name="a.bin"),
            media=io.BytesIO(b"12345678"),
            upload_mime_type="application/octet-stream",
            chunk_size=256 * 1024,
            cancel=CancellationToken(),
        )

        self.assertEqual(result.size, 8)
        self.assertEqual(self.req.next_chunk.call_count, 2)
        media = self.files_resource.update.call_args.kwargs["media_body"]
        self.assertTrue(media.resumable())
        self.assertEqual(media.chunksize(), 256 * 1024)
        self.assertEqual(media.mimetype(), "application/octet-stream")

    def test_cancelled_token_stops_chunk_loop(self) -> None:
        token = CancellationToken()
        reason = TransferTimeoutError("timeout, no data was transferred for 2s")

        def first_chunk():
            token.cancel(reason)
            return (Mock(resumable_progress=0, total_size=8), None)

        self.req.next_chunk.side_effect = first_chunk

        with self.assertRaises(TransferTimeoutError):
            self.controller.update(
                "F1",
                MetadataPatch(),
                media=io.BytesIO(b"12345678"),
                cancel=token,
            )
        self.assertEqual(self.req.next_chunk.call_count, 1)

    def test_cancellation_closes_request_connections(self) -> None:
        token = CancellationToken()
        conn = Mock()
        self.req.http = Mock()
        self.req.http.http.connections = {"k": conn}

        def stalled_chunk():
            token.cancel(TransferTimeoutError("stalled"))
            raise OSError("connection closed")

        self.req.next_chunk.side_effect = stalled_chunk

        with patch("time.sleep", return_value=None) as sleep:
            with self.assertRaises(NetworkError):
                self.controller.update(
                    "F1",
                    MetadataPatch(),
                    media=io.BytesIO(b"12345678"),
                    cancel=token,
                )
        conn.close.assert_called_once_with()
        # No retry once cancelled.
        sleep.assert_not_called()
        self.assertEqual(self.req.next_chunk.call_count, 1)

    def test_get_parents_maps_http_404_to_not_found(self) -> None:
        self.req.execute.side_effect = _http_error(404, "notFound", "File not found: X")

        with self.assertRaises(NotFoundError) as ctx:
            self.controller.get_parents("X")
        self.assertEqual(str(ctx.exception), "File not found: X")

    def test_retry_on_429(self) -> None:
        err = _http_error(429, "rateLimitExceeded", "rate limited")
        self.req.execute.side_effect = [err, err, {"id": "F1"}]

        with patch("time.sleep", return_value=None):
            result = self.controller.update("F1", MetadataPatch(description="x"))

        self.assertEqual(result.file_id, "F1")
        self.assertEqual(self.req.execute.call_count, 3)

    def test_403_user_rate_limit_is_rate_limit(self) -> None:
        self.req.execute.side_effect = _http_error(403, "userRateLimitExceeded")

        with patch("time.sleep", return_value=None):
            with self.assertRaises(RateLimitError):
                self.controller.get_parents("X")
        self.assertEqual(self.req.execute.call_count, 4)


if __name__ == "__main__":
    unittest.main()
