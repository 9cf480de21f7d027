import os
import tempfile
import unittest
from datetime import datetime, timezone
from unittest.mock import Mock, patch

from sharepointio.controller import drive_controller
from sharepointio.controller.drive_controller import (
    SharePointDrive,
    SharePointSite,
    _item_dict_to_drive_item,
)
from sharepointio.errors import ApiError, InvalidArgumentError, NotFoundError
from sharepointio.models import DriveItem


class TestDriveControllerHelpers(unittest.TestCase):
    def test_item_dict_to_drive_item_parses_fields(self) -> None:
        dt = datetime(2025, 1, 1, 0, 0, 0, tzinfo=timezone.utc)
        data = {
            "id": "I1",
            "name": "out.csv",
            "size": 123,
            "webUrl": "https://x/out.csv",
            "eTag": '"{abc},1"',
            "createdDateTime": "2025-01-01T00:00:00Z",
            "lastModifiedDateTime": "2025-01-01T00:00:00Z",
            "file": {"mimeType": "text/csv"},
            "parentReference": {"path": "/drives/D1/root:/My%20Reports/2024"},
        }
        item = _item_dict_to_drive_item(data)
        self.assertEqual(item.item_id, "I1")
        self.assertFalse(item.is_folder)
        self.assertEqual(item.size, 123)
        self.assertEqual(item.parent_path, "My Reports/2024")
        self.assertEqual(item.path, "My Reports/2024/out.csv")
        self.assertEqual(item.modified_time, dt)
        self.assertEqual(item.created_time, dt)

    def test_folder_facet_and_root_parent(self) -> None:
        item = _item_dict_to_drive_item(
            {"id": "F1", "name": "reports", "folder": {"childCount": 2},
             "parentReference": {"path": "/drives/D1/root:"},
             "lastModifiedDateTime": "garbage"}
        )
        self.assertTrue(item.is_folder)
        self.assertEqual(item.parent_path, "")
        self.assertIsNone(item.modified_time)


class TestSharePointSite(unittest.TestCase):
    def test_resolve_by_host_and_path(self) -> None:
        client = Mock()
        client.get_json.return_value = {
            "id": "host,1,2",
            "displayName": "Team A",
            "webUrl": "https://x.sharepoint.com/sites/a",
        }

        site = SharePointSite.resolve(client, "x.sharepoint.com", "sites/a")

        self.assertEqual(site.site_id, "host,1,2")
        self.assertEqual(site.name, "Team A")
        self.assertEqual(client.get_json.call_args.args[0], "sites/x.sharepoint.com:/sites/a")

    def test_resolve_root_site(self) -> None:
        client = Mock()
        client.get_json.return_value = {"id": "root"}
        SharePointSite.resolve(client, "x.sharepoint.com")
        self.assertEqual(client.get_json.call_args.args[0], "sites/x.sharepoint.com")

    def test_get_drive_by_name(self) -> None:
        client = Mock()
        client.iter_pages.return_value = iter(
            [{"id": "D1", "name": "Documents"}, {"id": "D2", "name": "Shared Files"}]
        )
        site = SharePointSite(client, site_id="S1")

        drive = site.get_drive("Shared Files")

        self.assertIsInstance(drive, SharePointDrive)
        self.assertEqual(drive.drive_id, "D2")
        self.assertEqual(client.iter_pages.call_args.args[0], "sites/S1/drives")

    def test_get_drive_unknown_name(self) -> None:
        client = Mock()
        client.iter_pages.return_value = iter([{"id": "D1", "name": "Documents"}])
        site = SharePointSite(client, site_id="S1")

        with self.assertRaises(NotFoundError) as ctx:
            site.get_drive("Nope")
        self.assertEqual(ctx.exception.details["available"], ["Documents"])

    def test_get_drive_rejects_empty_name(self) -> None:
        site = SharePointSite(Mock(), site_id="S1")
        with self.assertRaises(InvalidArgumentError):
            site.get_drive("")


class TestSharePointDrive(unittest.TestCase):
    def setUp(self) -> None:
        self.client = Mock()
        self.drive = SharePointDrive(self.client, drive_id="D1", name="Documents")
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)

    def _local_file(self, size: int) -> str:
        path = os.path.join(self.tmp.name, "payload.bin")
        with open(path, "wb") as f:
            f.write(b"x" * size)
        return path

    def test_get_item_uses_path_addressing(self) -> None:
        self.client.get_json.return_value = {"id": "I1", "name": "a b.csv"}
        item = self.drive.get_item("reports/a b.csv")
        self.assertEqual(item.item_id, "I1")
        self.assertEqual(self.client.get_json.call_args.args[0], "drives/D1/root:/reports/a%20b.csv")

    def test_get_item_propagates_not_found(self) -> None:
        self.client.get_json.side_effect = NotFoundError("missing")
        with self.assertRaises(NotFoundError):
            self.drive.get_item("missing.csv")

    def test_download_file_targets_content(self) -> None:
        self.drive.download_file("reports/out.csv", "/tmp/x.csv")
        self.client.download_to.assert_called_once_with(
            "drives/D1/root:/reports/out.csv:/content", "/tmp/x.csv"
        )

    def test_small_upload_to_root(self) -> None:
        self.client.put_content.return_value = {"id": "N1", "name": "out.csv"}
        local = self._local_file(10)

        item = self.drive.upload_file(local, "out.csv")

        self.assertEqual(item.item_id, "N1")
        args, kwargs = self.client.put_content.call_args
        self.assertEqual(args[0], "drives/D1/root:/out.csv:/content")
        self.assertEqual(args[1], b"x" * 10)
        self.assertEqual(kwargs["params"], {"@microsoft.graph.conflictBehavior": "replace"})

    def test_small_upload_into_folder_by_id(self) -> None:
        self.client.put_content.return_value = {"id": "N1", "name": "out.csv"}
        folder = DriveItem(item_id="F1", name="reports", is_folder=True)

        self.drive.upload_file(self._local_file(3), "out.csv", folder=folder)

        self.assertEqual(self.client.put_content.call_args.args[0], "drives/D1/items/F1:/out.csv:/content")

    def test_large_upload_uses_session_chunks(self) -> None:
        self.client.post_json.return_value = {"uploadUrl": "https://upload/1"}
        self.client.put_chunk.side_effect = [{}, {"id": "N2", "name": "big.csv"}]
        local = self._local_file(25)

        with patch.object(drive_controller, "SIMPLE_UPLOAD_MAX_BYTES", 10), patch.object(
            drive_controller, "UPLOAD_CHUNK_BYTES", 16
        ):
            item = self.drive.upload_file(local, "big.csv")

        self.assertEqual(item.item_id, "N2")
        self.client.put_content.assert_not_called()
        self.assertEqual(
            self.client.post_json.call_args.args[0],
            "drives/D1/root:/big.csv:/createUploadSession",
        )
        starts = [c.kwargs["start"] for c in self.client.put_chunk.call_args_list]
        self.assertEqual(starts, [0, 16])
        self.assertTrue(all(c.kwargs["total"] == 25 for c in self.client.put_chunk.call_args_list))

    def test_upload_session_without_url(self) -> None:
        self.client.post_json.return_value = {}
        with patch.object(drive_controller, "SIMPLE_UPLOAD_MAX_BYTES", 1):
            with self.assertRaises(ApiError):
                self.drive.upload_file(self._local_file(5), "big.csv")

    def test_upload_rejects_nested_name(self) -> None:
        with self.assertRaises(InvalidArgumentError):
            self.drive.upload_file(self._local_file(1), "a/b.csv")


if __name__ == "__main__":
    unittest.main()
