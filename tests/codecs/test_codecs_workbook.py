import os
import tempfile
import unittest

import pandas as pd
from pandas.testing import assert_frame_equal

from sharepointio.codecs import WorkbookCodec, WorkbookReadOptions, WorkbookWriteOptions
from sharepointio.errors import InvalidArgumentError


class TestWorkbookCodec(unittest.TestCase):
    def setUp(self) -> None:
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.path = os.path.join(self.tmp.name, "wb.xlsx")
        self.df = pd.DataFrame({"name": ["a", "b"], "value": [1, 2]})

    def test_single_sheet_round_trip(self) -> None:
        codec = WorkbookCodec()
        codec.encode(self.df, self.path)
        assert_frame_equal(codec.decode(self.path), self.df)

    def test_single_sheet_uses_configured_name(self) -> None:
        WorkbookCodec(write_options=WorkbookWriteOptions(sheet="Data")).encode(self.df, self.path)
        out = WorkbookCodec(read_options=WorkbookReadOptions(sheet="Data")).decode(self.path)
        assert_frame_equal(out, self.df)

    def test_mapping_writes_one_sheet_per_key(self) -> None:
        other = pd.DataFrame({"x": [10]})
        WorkbookCodec().encode({"first": self.df, "second": other}, self.path)

        sheets = WorkbookCodec(read_options=WorkbookReadOptions(all_sheets=True)).decode(self.path)

        self.assertEqual(list(sheets), ["first", "second"])
        assert_frame_equal(sheets["second"], other)

    def test_start_row_and_header(self) -> None:
        WorkbookCodec().encode(self.df, self.path)
        out = WorkbookCodec(read_options=WorkbookReadOptions(start_row=2, header=False)).decode(self.path)
        self.assertEqual(out.shape, (2, 2))
        self.assertEqual(out.iloc[0, 0], "a")

    def test_start_row_must_be_positive(self) -> None:
        with self.assertRaises(ValueError):
            WorkbookReadOptions(start_row=0)

    def test_encode_rejects_bad_values(self) -> None:
        for bad in ([1, 2], {}, {"s": [1]}, {1: self.df}):
            with self.subTest(bad=bad):
                with self.assertRaises(TypeError):
                    WorkbookCodec().encode(bad, self.path)

    def test_staging_suffix_follows_remote_extension(self) -> None:
        codec = WorkbookCodec()
        self.assertEqual(codec.staging_suffix("old/Book.XLS"), ".xls")
        self.assertEqual(codec.staging_suffix("Book.xlsx"), ".xlsx")

    def test_write_requires_xlsx(self) -> None:
        codec = WorkbookCodec()
        codec.check_write_path("out/Book.XLSX")
        codec.check_read_path("legacy.xls")
        with self.assertRaises(InvalidArgumentError):
            codec.check_write_path("legacy.xls")


if __name__ == "__main__":
    unittest.main()
