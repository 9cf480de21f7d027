import os
import tempfile
import unittest

import pandas as pd
import pyarrow as pa
from pandas.testing import assert_frame_equal

from sharepointio.codecs import (
    CsvCodec,
    CsvReadOptions,
    CsvWriteOptions,
    FastCsvCodec,
    FastReadOptions,
    FastWriteOptions,
)


def _frame() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "id": [1, 2, 3],
            "amount": [1.5, -2.25, 1e6],
            "label": ["alpha", "with, comma", 'quote "x"'],
        }
    )


class TestCsvCodec(unittest.TestCase):
    def setUp(self) -> None:
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.path = os.path.join(self.tmp.name, "t.csv")

    def test_round_trip_preserves_types(self) -> None:
        codec = CsvCodec()
        codec.encode(_frame(), self.path)
        assert_frame_equal(codec.decode(self.path), _frame())

    def test_text_cells_that_look_numeric_or_missing_survive(self) -> None:
        df = pd.DataFrame({"code": ["001", "NA", ""], "n": [1, 2, 3]})
        codec = CsvCodec()

        codec.encode(df, self.path)

        assert_frame_equal(codec.decode(self.path), df)

    def test_missing_numbers_are_nan(self) -> None:
        df = pd.DataFrame({"label": ["a", "b", "c"], "amount": [1.5, None, 3.0]})
        codec = CsvCodec()

        codec.encode(df, self.path)

        assert_frame_equal(codec.decode(self.path), df)

    def test_keep_default_na_applies_to_text_columns(self) -> None:
        with open(self.path, "w", encoding="utf-8") as f:
            f.write("code,n\n001,1\nNA,NA\n,3\n")

        out = CsvCodec(read_options=CsvReadOptions(keep_default_na=True)).decode(self.path)

        self.assertEqual(out["code"].iloc[0], "001")
        self.assertTrue(out["code"].iloc[1:].isna().all())
        self.assertTrue(pd.isna(out["n"].iloc[1]))

    def test_explicit_dtype_overrides_detection(self) -> None:
        with open(self.path, "w", encoding="utf-8") as f:
            f.write("zip,n\n02134,1\n10001,2\n")

        out = CsvCodec(read_options=CsvReadOptions(dtype={"n": "float64"})).decode(self.path)

        self.assertEqual(out["zip"].tolist(), ["02134", "10001"])
        self.assertEqual(out["n"].dtype, "float64")

    def test_index_not_written_by_default(self) -> None:
        CsvCodec().encode(_frame(), self.path)
        with open(self.path, encoding="utf-8") as f:
            self.assertEqual(f.readline().strip(), "id,amount,label")

    def test_write_and_read_options(self) -> None:
        df = pd.DataFrame({"a": [1, None], "b": ["x", "y"]})
        CsvCodec(write_options=CsvWriteOptions(sep=";", na_rep="NA")).encode(df, self.path)
        with open(self.path, encoding="utf-8") as f:
            self.assertEqual(f.read().splitlines(), ["a;b", "1.0;x", "NA;y"])

        out = CsvCodec(read_options=CsvReadOptions(sep=";", header=False, skiprows=1)).decode(self.path)
        self.assertEqual(list(out.columns), [0, 1])
        self.assertEqual(len(out), 2)

    def test_encode_rejects_non_frame(self) -> None:
        with self.assertRaises(TypeError):
            CsvCodec().encode([[1, 2]], self.path)

    def test_decode_missing_file_raises(self) -> None:
        with self.assertRaises(FileNotFoundError):
            CsvCodec().decode(os.path.join(self.tmp.name, "missing.csv"))


class TestFastCsvCodec(unittest.TestCase):
    def setUp(self) -> None:
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.path = os.path.join(self.tmp.name, "t.csv")

    def test_round_trip_from_pandas(self) -> None:
        codec = FastCsvCodec()
        codec.encode(_frame(), self.path)
        assert_frame_equal(codec.decode(self.path), _frame())

    def test_rewrite_is_byte_identical(self) -> None:
        codec = FastCsvCodec(read_options=FastReadOptions(as_arrow=True))
        codec.encode(_frame(), self.path)
        with open(self.path, "rb") as f:
            first = f.read()

        second_path = os.path.join(self.tmp.name, "t2.csv")
        codec.encode(codec.decode(self.path), second_path)
        with open(second_path, "rb") as f:
            self.assertEqual(f.read(), first)

    def test_arrow_output_and_column_selection(self) -> None:
        FastCsvCodec().encode(_frame(), self.path)
        table = FastCsvCodec(
            read_options=FastReadOptions(include_columns=["label"], as_arrow=True)
        ).decode(self.path)
        self.assertIsInstance(table, pa.Table)
        self.assertEqual(table.column_names, ["label"])

    def test_delimiter_and_header_options(self) -> None:
        table = pa.table({"a": [1, 2]})
        FastCsvCodec(write_options=FastWriteOptions(delimiter="|", include_header=False)).encode(
            table, self.path
        )
        with open(self.path, encoding="utf-8") as f:
            self.assertEqual(f.read().splitlines(), ["1", "2"])

    def test_encode_rejects_other_types(self) -> None:
        with self.assertRaises(TypeError):
            FastCsvCodec().encode({"a": [1]}, self.path)


if __name__ == "__main__":
    unittest.main()
